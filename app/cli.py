# =======================================================================================
# app/cli.py - Operational Commands
# =======================================================================================
"""
Operational commands. Run from project root:
  python -m app.cli init-db [--without-transactions]
  python -m app.cli create-admin NAME EMAIL PASSWORD
  python -m app.cli add-scanner STATION_NAME {entry,exit}
"""
import argparse
import sys
from typing import List, Optional

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from .config import Config, config
from .database import DatabaseManager
from .logging_config import configure_logging
from .services.session_service import PasswordHasher


def init_db(db: DatabaseManager, args: argparse.Namespace) -> int:
    db.create_schema(with_transactions=not args.without_transactions)
    print("Tables created." if not args.without_transactions else "Accounts table created.")
    return 0


def create_admin(db: DatabaseManager, args: argparse.Namespace, cfg: Config) -> int:
    name = args.name.strip()
    email = args.email.strip()
    if not name or not email:
        print("Name and email must be non-empty.", file=sys.stderr)
        return 1
    hasher = PasswordHasher(cfg)
    with db.get_connection() as conn:
        try:
            conn.execute(
                text(
                    """
                    INSERT INTO accounts (name, email, password_hash, role, status, balance)
                    VALUES (:name, :email, :password_hash, 'admin', 'active', 0)
                    """
                ),
                {"name": name, "email": email, "password_hash": hasher.hash_password(args.password)},
            )
            conn.commit()
        except IntegrityError:
            print(f"Account '{email}' already exists.", file=sys.stderr)
            return 1
    print(f"Created admin '{email}'.")
    return 0


def add_scanner(db: DatabaseManager, args: argparse.Namespace) -> int:
    with db.get_connection() as conn:
        station = conn.execute(
            text("SELECT id FROM stations WHERE name = :name"), {"name": args.station}
        ).mappings().first()
        if station is None:
            conn.execute(text("INSERT INTO stations (name) VALUES (:name)"), {"name": args.station})
            station = conn.execute(
                text("SELECT id FROM stations WHERE name = :name"), {"name": args.station}
            ).mappings().first()
        result = conn.execute(
            text("INSERT INTO scanners (type, station_id) VALUES (:type, :sid)"),
            {"type": args.type, "sid": station["id"]},
        )
        scanner_id = result.lastrowid
        conn.commit()
    print(f"Scanner {scanner_id} ({args.type}) registered at '{args.station}'.")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="RFID transit backend administration.")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("init-db", help="Create database tables")
    p.add_argument("--without-transactions", action="store_true",
                   help="Only create the accounts table")

    p = sub.add_parser("create-admin", help="Create an admin account")
    p.add_argument("name")
    p.add_argument("email")
    p.add_argument("password")

    p = sub.add_parser("add-scanner", help="Register a scanner at a station")
    p.add_argument("station", help="Station name (created if missing)")
    p.add_argument("type", choices=["entry", "exit"])
    return parser


def main(argv: Optional[List[str]] = None, db: Optional[DatabaseManager] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(config)
    db = db or DatabaseManager(config)

    if args.command == "init-db":
        return init_db(db, args)
    if args.command == "create-admin":
        return create_admin(db, args, db.config)
    return add_scanner(db, args)


if __name__ == "__main__":
    sys.exit(main())
