"""Create the Task Tracker tables.

Usage:
  python scripts/init_db.py           # create missing tables
  python scripts/init_db.py --drop    # drop every table first, then recreate
"""
import argparse
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tasktracker.database import engine, Base
import tasktracker.models  # noqa: F401 - registers all models


def init_db(bind=None, drop: bool = False):
    bind = bind if bind is not None else engine
    if drop:
        print(f"Dropping {len(Base.metadata.tables)} tables...")
        Base.metadata.drop_all(bind=bind)
    Base.metadata.create_all(bind=bind)
    print(f"Database ready: {', '.join(sorted(Base.metadata.tables))}")


def main():
    parser = argparse.ArgumentParser(description="Create the Task Tracker tables.")
    parser.add_argument("--drop", action="store_true", help="Drop all tables before creating them (destroys data)")
    args = parser.parse_args()
    init_db(drop=args.drop)


if __name__ == "__main__":
    main()
