# =======================================================================================
# app/models/tables.py - Table Definitions (DDL only, queries stay plain SQL)
# =======================================================================================
from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    func,
)

metadata = MetaData()

accounts = Table(
    "accounts",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False),
    Column("email", String(255), nullable=False, unique=True),
    Column("password_hash", String(255), nullable=False),
    Column("role", String(16), nullable=False, server_default="user"),
    Column("tag_id", String(100), nullable=True, unique=True),
    Column("status", String(32), nullable=False, server_default="active"),
    Column("balance", Numeric(10, 2), nullable=False, server_default="0"),
    Column("created_at", DateTime, nullable=False, server_default=func.current_timestamp()),
)

stations = Table(
    "stations",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False, unique=True),
)

scanners = Table(
    "scanners",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("type", String(16), nullable=False, server_default="entry"),
    Column("station_id", Integer, ForeignKey("stations.id"), nullable=False),
)

transactions = Table(
    "transactions",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", Integer, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False),
    Column("scanner_id", Integer, ForeignKey("scanners.id"), nullable=False),
    Column("event", String(16), nullable=False),
    Column("timestamp", DateTime, nullable=False, server_default=func.current_timestamp()),
)

# Optional tables backing transaction history
TRANSACTION_TABLES = (stations, scanners, transactions)
TRANSACTION_TABLE_NAMES = tuple(t.name for t in TRANSACTION_TABLES)
