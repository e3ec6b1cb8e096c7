"""
Theme catalog - immutable lookup table for the 34 CliftonStrengths themes
All extraction and validation is anchored to this catalog
"""
import re
import threading
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Optional, Tuple
import logging

from strengthsync.app.core import strengths_data

logger = logging.getLogger(__name__)

_TRADEMARK_MARKS = re.compile(r"[®™]")
_WHITESPACE = re.compile(r"\s+")


def normalize(value: str) -> str:
    """
    Normalize a theme name for lookup

    Strips trademark marks, collapses whitespace, turns hyphens into spaces
    and lowercases, so "Self-Assurance®" and "self  assurance" share a key.
    """
    value = _TRADEMARK_MARKS.sub("", value).replace("-", " ")
    return _WHITESPACE.sub(" ", value).strip().lower()


@dataclass(frozen=True)
class DomainDefinition:
    """One of the 4 fixed domains grouping the themes"""
    slug: str
    name: str
    description: str = ""
    color_hex: str = "#6B7280"


@dataclass(frozen=True)
class ThemeDefinition:
    """Immutable reference entry for a single theme"""
    name: str
    slug: str
    domain_slug: str
    short_description: str = ""
    works_with: Tuple[str, ...] = field(default_factory=tuple)
    keywords: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ThemePairing:
    """Complementary pairing of two themes"""
    theme1: str
    theme2: str
    synergy_type: str
    description: str

    def involves(self, slug: str) -> bool:
        return slug in (self.theme1, self.theme2)


class ThemeCatalog:
    """
    Read-only catalog of theme definitions

    Built once from static reference data. Lookup accepts canonical names,
    case variants, slugs and cosmetic variants (trademark marks, hyphens,
    repeated whitespace). Safe to share across threads without locking.
    """

    def __init__(
        self,
        themes: List[ThemeDefinition],
        domains: List[DomainDefinition],
        pairings: Optional[List[ThemePairing]] = None,
    ):
        self._themes: Tuple[ThemeDefinition, ...] = tuple(themes)
        self._domains: Tuple[DomainDefinition, ...] = tuple(domains)
        self._pairings: Tuple[ThemePairing, ...] = tuple(pairings or [])

        by_slug: Dict[str, ThemeDefinition] = {}
        lookup: Dict[str, ThemeDefinition] = {}
        for theme in self._themes:
            by_slug[theme.slug] = theme
            lookup[normalize(theme.name)] = theme
            # Historical spellings all resolve to one definition
            lookup[theme.name.lower()] = theme
            lookup[theme.slug] = theme

        self._by_slug = MappingProxyType(by_slug)
        self._lookup = MappingProxyType(lookup)
        self._domains_by_slug = MappingProxyType({d.slug: d for d in self._domains})

    @classmethod
    def from_reference_data(cls) -> "ThemeCatalog":
        """Build the catalog from the bundled CliftonStrengths data"""
        themes = [
            ThemeDefinition(
                name=t["name"],
                slug=t["slug"],
                domain_slug=t["domain"],
                short_description=t.get("short_description", ""),
                works_with=tuple(t.get("works_with", [])),
                keywords=tuple(t.get("keywords", [])),
            )
            for t in strengths_data.THEMES
        ]
        domains = [
            DomainDefinition(
                slug=d["slug"],
                name=d["name"],
                description=d.get("description", ""),
                color_hex=d.get("color_hex", "#6B7280"),
            )
            for d in strengths_data.DOMAINS
        ]
        pairings = [
            ThemePairing(theme1=a, theme2=b, synergy_type=kind, description=desc)
            for a, b, kind, desc in strengths_data.COMPLEMENTARY_PAIRINGS
        ]
        return cls(themes, domains, pairings)

    def __len__(self) -> int:
        return len(self._themes)

    def __contains__(self, name: str) -> bool:
        return self.lookup(name) is not None

    def lookup(self, name: Optional[str]) -> Optional[ThemeDefinition]:
        """
        Resolve any spelling of a theme name (or its slug) to its definition

        Args:
            name: Raw text, e.g. "STRATEGIC", "Self-Assurance™", "self-assurance"

        Returns:
            ThemeDefinition or None if the text is not a theme
        """
        if not name:
            return None
        raw = name.strip().lower()
        if raw in self._lookup:
            return self._lookup[raw]
        return self._lookup.get(normalize(name))

    def get(self, slug: str) -> Optional[ThemeDefinition]:
        """Get a theme strictly by slug"""
        return self._by_slug.get(slug)

    def themes(self) -> List[ThemeDefinition]:
        return list(self._themes)

    def names(self) -> List[str]:
        """Canonical theme names in catalog order"""
        return [t.name for t in self._themes]

    def domains(self) -> List[DomainDefinition]:
        return list(self._domains)

    def domain(self, slug: str) -> Optional[DomainDefinition]:
        return self._domains_by_slug.get(slug)

    def domain_for(self, theme_slug: str) -> Optional[DomainDefinition]:
        theme = self.get(theme_slug)
        if theme is None:
            return None
        return self.domain(theme.domain_slug)

    def themes_in_domain(self, domain_slug: str) -> List[ThemeDefinition]:
        return [t for t in self._themes if t.domain_slug == domain_slug]

    def pairings_for(self, theme_slug: str) -> List[ThemePairing]:
        return [p for p in self._pairings if p.involves(theme_slug)]


_catalog: Optional[ThemeCatalog] = None
_catalog_lock = threading.Lock()


def get_theme_catalog() -> ThemeCatalog:
    """Get or create the shared catalog instance"""
    global _catalog
    if _catalog is None:
        with _catalog_lock:
            if _catalog is None:
                _catalog = ThemeCatalog.from_reference_data()
                logger.info(f"Theme catalog loaded: {len(_catalog)} themes, {len(_catalog.domains())} domains")
    return _catalog
