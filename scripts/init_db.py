# scripts/init_db.py
from __future__ import annotations

import argparse
import sys

from sqlalchemy import inspect

from app.core.db import engine
from app.models.base import Base

# register every table in Base.metadata
import app.models.user  # noqa: F401
import app.models.task  # noqa: F401
import app.models.assignment  # noqa: F401
import app.models.client_message  # noqa: F401

REQUIRED_TABLES = {"users", "tasks", "assignments", "client_messages"}


def die(msg: str) -> None:
    print(f"[init-db] ERROR: {msg}", file=sys.stderr)
    sys.exit(1)


def create_schema() -> None:
    Base.metadata.create_all(bind=engine)
    print(f"[ok] schema created on {engine.url.render_as_string(hide_password=True)}")


def check_schema() -> None:
    present = set(inspect(engine).get_table_names())
    missing = REQUIRED_TABLES - present
    if missing:
        die(f"missing tables: {sorted(missing)}")
    print("[ok] required tables present")


def main() -> None:
    parser = argparse.ArgumentParser("Create or check the task assignments schema")
    parser.add_argument("--check", action="store_true", help="Only check that the tables exist")
    args = parser.parse_args()

    if args.check:
        check_schema()
    else:
        create_schema()
        check_schema()


if __name__ == "__main__":
    main()
