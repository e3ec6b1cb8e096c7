#!/usr/bin/env python3
"""
Initialize the StrengthSync database

Creates all tables and seeds the 4 domains and 34 themes.
Safe to re-run: the catalog is updated in place.
"""
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from strengthsync.app.database import get_session_local, init_db
from strengthsync.app.services.catalog_seed import seed_catalog

if __name__ == "__main__":
    print("Initializing database tables...")
    try:
        init_db()
        db = get_session_local()()
        try:
            counts = seed_catalog(db)
        finally:
            db.close()
        print("✓ Database tables created successfully!")
        print(f"  - strength_domains: {counts['domains_created']} created")
        print(f"  - strength_themes: {counts['themes_created']} created")
        print(f"  - {counts['updated']} existing catalog rows updated")
    except Exception as e:
        print(f"✗ Error initializing database: {e}")
        sys.exit(1)
