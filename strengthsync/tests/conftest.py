"""
Pytest configuration and shared fixtures
"""
import io
import os
import sys
from typing import Any, Callable, List, Sequence
from unittest.mock import MagicMock

import pytest
from openpyxl import Workbook
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Add repository root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../..'))

from strengthsync.app.core.theme_catalog import ThemeCatalog
from strengthsync.app.database import Base, import_models
from strengthsync.app.models.member import MEMBER_STATUS_INACTIVE, Organization, OrganizationMember
from strengthsync.app.services.catalog_seed import seed_catalog

GENERIC_DESCRIPTION = (
    "You bring a distinctive way of working that colleagues notice and rely on every day. "
    "People around you feel the difference when you are in the room."
)


@pytest.fixture
def catalog() -> ThemeCatalog:
    """Fresh catalog built from the bundled reference data"""
    return ThemeCatalog.from_reference_data()


@pytest.fixture
def theme_names(catalog) -> List[str]:
    """The 34 canonical theme names in catalog order"""
    return catalog.names()


@pytest.fixture
def full_report_text(theme_names) -> str:
    """Text of a full 34-theme report for Jane Doe"""
    lines = ["CliftonStrengths 34", "Your Signature Themes", "Jane Doe", ""]
    for i, name in enumerate(theme_names, start=1):
        lines.append(f"{i}. {name}")
        lines.append(GENERIC_DESCRIPTION)
        lines.append("")
    return "\n".join(lines)


@pytest.fixture
def top_five_report_text(theme_names) -> str:
    """Text of a Top 5 report prepared for John Smith"""
    lines = ["Signature Themes Report", "John Smith", ""]
    for i, name in enumerate(theme_names[:5], start=1):
        lines.append(f"{i}. {name}")
        lines.append(GENERIC_DESCRIPTION)
    return "\n".join(lines)


@pytest.fixture
def make_workbook() -> Callable[[Sequence[Sequence[Any]]], bytes]:
    """Factory turning a list of rows into .xlsx bytes (first sheet)"""
    def _make(rows: Sequence[Sequence[Any]]) -> bytes:
        workbook = Workbook()
        sheet = workbook.active
        for row in rows:
            sheet.append(list(row))
        buffer = io.BytesIO()
        workbook.save(buffer)
        return buffer.getvalue()
    return _make


@pytest.fixture
def gallup_rows(theme_names) -> List[List[Any]]:
    """Gallup Access style grid: header plus two ranked participants"""
    header = ["Name", "Email"] + theme_names
    jane = ["Jane Doe", "JANE@example.com"] + list(range(1, 35))
    john = ["Smith, John", ""] + list(range(34, 0, -1))
    return [header, jane, john]


@pytest.fixture
def engine():
    """In-memory SQLite engine shared across sessions and threads"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    import_models()
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    """Session factory with the theme catalog seeded"""
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = factory()
    try:
        seed_catalog(db)
    finally:
        db.close()
    return factory


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    yield db
    db.close()


@pytest.fixture
def organization(session_factory):
    """Organization with two active members and one inactive member"""
    db = session_factory()
    try:
        org = Organization(id="org-1", name="Acme", slug="acme")
        db.add(org)
        db.add_all([
            OrganizationMember(id="member-jane", organization_id="org-1",
                               email="jane@example.com", full_name="Jane Doe"),
            OrganizationMember(id="member-john", organization_id="org-1",
                               email="john.smith@example.com", full_name="John Smith"),
            OrganizationMember(id="member-ina", organization_id="org-1",
                               email="ina@example.com", full_name="Ina Active",
                               status=MEMBER_STATUS_INACTIVE),
        ])
        db.commit()
        return {"id": "org-1", "jane": "member-jane", "john": "member-john", "ina": "member-ina"}
    finally:
        db.close()


@pytest.fixture
def mock_db_session():
    """Mock SQLAlchemy database session"""
    session = MagicMock()
    session.query.return_value = session
    session.filter.return_value = session
    session.all.return_value = []
    session.first.return_value = None
    session.count.return_value = 0
    return session


@pytest.fixture(autouse=True)
def reset_environment():
    """Reset environment variables before each test"""
    original_env = os.environ.copy()
    os.environ['TESTING'] = 'true'

    yield

    os.environ.clear()
    os.environ.update(original_env)
