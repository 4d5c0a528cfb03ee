#!/usr/bin/env python3
"""
Initialize database tables and the sample menu (development only)
In production, use Alembic migrations.
"""
import sys
import os

# Add app directory to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core.db import SessionLocal, create_tables
from app.core.seed import seed_menu
from app.core import models as _models  # noqa: F401  register tables on Base


def main():
    print("Initializing database tables...")
    try:
        create_tables()
        print("Database tables created successfully")
        db = SessionLocal()
        try:
            added = seed_menu(db)
        finally:
            db.close()
        print(f"Sample menu items inserted: {added}")
    except Exception as e:
        print(f"Error initializing database: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
