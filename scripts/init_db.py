#!/usr/bin/env python3
# =============================================================================
# scripts/init_db.py - Create Database Tables
# =============================================================================
# Creates the users and tasks tables in DATABASE_URL. Useful when the API
# runs with AUTO_CREATE_TABLES=false.
#
# Usage:
#   python scripts/init_db.py
#   python scripts/init_db.py --reset   # drop everything first
#
# Prerequisites:
#   - Environment variables must be set (.env file)
# =============================================================================

import argparse
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv

load_dotenv()

from app.config import settings  # noqa: E402
from core.database import drop_db, init_db  # noqa: E402


def main():
    parser = argparse.ArgumentParser(description="Create TaskTracker database tables")
    parser.add_argument("--reset", action="store_true", help="Drop all tables before creating them")
    args = parser.parse_args()

    print("=" * 60)
    print("TaskTracker Database Setup")
    print("=" * 60)
    print(f"Database: {settings.DATABASE_URL}")

    if args.reset:
        if settings.is_production:
            print("Refusing to drop tables in production.")
            sys.exit(1)
        print("Dropping tables...")
        drop_db()

    print("Creating tables...")
    init_db()
    print("Done.")


if __name__ == "__main__":
    main()
