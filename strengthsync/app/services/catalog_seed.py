"""
Seed the stored catalog tables from the in-memory theme catalog
"""
import logging
from typing import Dict, Optional

from sqlalchemy.orm import Session

from strengthsync.app.core.theme_catalog import ThemeCatalog, get_theme_catalog
from strengthsync.app.models.strength import StrengthDomain, StrengthTheme

logger = logging.getLogger(__name__)


def seed_catalog(db: Session, catalog: Optional[ThemeCatalog] = None) -> Dict[str, int]:
    """
    Insert or update every domain and theme

    Safe to run repeatedly; existing rows are updated in place by slug.

    Returns:
        Counts of created and updated rows
    """
    catalog = catalog or get_theme_catalog()
    counts = {"domains_created": 0, "themes_created": 0, "updated": 0}

    domains_by_slug: Dict[str, StrengthDomain] = {d.slug: d for d in db.query(StrengthDomain).all()}
    for definition in catalog.domains():
        row = domains_by_slug.get(definition.slug)
        if row is None:
            row = StrengthDomain(slug=definition.slug)
            db.add(row)
            domains_by_slug[definition.slug] = row
            counts["domains_created"] += 1
        else:
            counts["updated"] += 1
        row.name = definition.name
        row.description = definition.description
        row.color_hex = definition.color_hex
    db.flush()

    themes_by_slug = {t.slug: t for t in db.query(StrengthTheme).all()}
    for definition in catalog.themes():
        row = themes_by_slug.get(definition.slug)
        if row is None:
            row = StrengthTheme(slug=definition.slug)
            db.add(row)
            counts["themes_created"] += 1
        else:
            counts["updated"] += 1
        row.name = definition.name
        row.domain_id = domains_by_slug[definition.domain_slug].id
        row.short_description = definition.short_description
        row.works_with = list(definition.works_with)
        row.keywords = list(definition.keywords)

    db.commit()
    logger.info(
        f"Catalog seeded: {counts['domains_created']} domains and "
        f"{counts['themes_created']} themes created, {counts['updated']} rows updated"
    )
    return counts
