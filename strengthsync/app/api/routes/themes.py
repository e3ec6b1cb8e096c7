"""
Theme catalog API endpoints
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query

from strengthsync.app.core.theme_catalog import ThemeCatalog, ThemeDefinition, get_theme_catalog
from strengthsync.app.models.schemas import (
    DomainSummary,
    DomainWithThemes,
    ThemeDetailResponse,
    ThemePairingResponse,
    ThemeResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _theme_response(theme: ThemeDefinition) -> ThemeResponse:
    return ThemeResponse(
        slug=theme.slug,
        name=theme.name,
        domain=theme.domain_slug,
        short_description=theme.short_description,
        works_with=list(theme.works_with),
        keywords=list(theme.keywords),
    )


def _domain_summary(catalog: ThemeCatalog, slug: str) -> Optional[DomainSummary]:
    domain = catalog.domain(slug)
    if domain is None:
        return None
    return DomainSummary(
        slug=domain.slug,
        name=domain.name,
        description=domain.description,
        color_hex=domain.color_hex,
    )


@router.get("/themes", response_model=List[ThemeResponse])
async def list_themes(domain: Optional[str] = Query(None, description="Filter by domain slug")):
    """
    List the 34 themes, optionally restricted to one domain
    """
    catalog = get_theme_catalog()
    if domain:
        if catalog.domain(domain) is None:
            raise HTTPException(status_code=404, detail=f"Domain {domain} not found")
        themes = catalog.themes_in_domain(domain)
    else:
        themes = catalog.themes()
    return [_theme_response(t) for t in themes]


@router.get("/themes/{slug}", response_model=ThemeDetailResponse)
async def get_theme(slug: str):
    """Get one theme with its domain and complementary pairings"""
    catalog = get_theme_catalog()
    theme = catalog.get(slug)
    if theme is None:
        raise HTTPException(status_code=404, detail=f"Theme {slug} not found")

    pairings = []
    for pairing in catalog.pairings_for(slug):
        partner_slug = pairing.theme2 if pairing.theme1 == slug else pairing.theme1
        partner = catalog.get(partner_slug)
        pairings.append(ThemePairingResponse(
            partner_slug=partner_slug,
            partner_name=partner.name if partner else partner_slug,
            synergy_type=pairing.synergy_type,
            description=pairing.description,
        ))

    base = _theme_response(theme)
    return ThemeDetailResponse(
        **base.model_dump(),
        domain_info=_domain_summary(catalog, theme.domain_slug),
        pairings=pairings,
    )


@router.get("/domains", response_model=List[DomainWithThemes])
async def list_domains():
    """List the 4 domains with their themes"""
    catalog = get_theme_catalog()
    return [
        DomainWithThemes(
            slug=domain.slug,
            name=domain.name,
            description=domain.description,
            color_hex=domain.color_hex,
            themes=[_theme_response(t) for t in catalog.themes_in_domain(domain.slug)],
        )
        for domain in catalog.domains()
    ]
