from __future__ import annotations

import argparse
import sys
from pathlib import Path


def _bootstrap_import_path() -> None:
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))


_bootstrap_import_path()

from sqlalchemy import create_engine, inspect  # noqa: E402

from waysbucks.config import build_sqlalchemy_db_url, settings  # noqa: E402
from waysbucks.database import Base, mask_db_url  # noqa: E402
import waysbucks.models  # noqa: F401,E402  # register users/profiles/products


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create the store tables (users, profiles, products).")
    parser.add_argument("--db-url", default=None, help="Target DB URL (defaults to the configured ORM URL).")
    parser.add_argument(
        "--i-understand",
        action="store_true",
        help="Required safety flag. Prevents accidental DDL against shared DBs.",
    )
    args = parser.parse_args(argv)

    if not args.i_understand:
        print("Refusing to run without --i-understand (safety).")
        return 2

    url = args.db_url or build_sqlalchemy_db_url(settings)
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    engine = create_engine(url, pool_pre_ping=True, future=True, connect_args=connect_args)

    existing = set(inspect(engine).get_table_names())
    missing = [name for name in Base.metadata.tables if name not in existing]
    print(f"target: {mask_db_url(url)}")
    print(f"existing tables: {', '.join(sorted(existing)) or '-'}")

    Base.metadata.create_all(bind=engine)
    print(f"created: {', '.join(missing) or 'nothing (all tables present)'}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
