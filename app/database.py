# =======================================================================================
# app/database.py - Database Management
# =======================================================================================
import logging
from contextlib import contextmanager
from typing import Generator, Optional
from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import QueuePool
from .config import Config
from .models.tables import TRANSACTION_TABLE_NAMES, TRANSACTION_TABLES, accounts, metadata

logger = logging.getLogger(__name__)


def engine_options(cfg: Config) -> dict:
    """Pool settings for create_engine; SQLite keeps its own isolation handling."""
    options = dict(
        poolclass=QueuePool,
        pool_size=cfg.DB_POOL_SIZE,
        max_overflow=cfg.DB_MAX_OVERFLOW,
        pool_pre_ping=True,
        future=True,
    )
    if not cfg.DB_URL.startswith("sqlite"):
        options["isolation_level"] = "READ COMMITTED"
    return options


class DatabaseManager:
    """Manages the connection pool and the schema features resolved at startup."""

    def __init__(self, cfg: Config, engine: Optional[Engine] = None):
        self.config = cfg
        self.engine: Engine = engine or create_engine(cfg.DB_URL, **engine_options(cfg))
        self._transactions_enabled: Optional[bool] = None

    @contextmanager
    def get_connection(self) -> Generator[Connection, None, None]:
        """Check out a pooled connection; it is returned (and rolled back) on exit."""
        with self.engine.connect() as conn:
            yield conn

    def fetch_one(self, query: str, params: dict = None):
        """Fetch a single result."""
        with self.get_connection() as conn:
            result = conn.execute(text(query), params or {})
            return result.mappings().first()

    def ping(self) -> bool:
        try:
            self.fetch_one("SELECT 1")
            return True
        except SQLAlchemyError as e:
            logger.warning("Database ping failed: %s", e)
            return False

    # ------------------------------------------------------------------
    # Schema
    # ------------------------------------------------------------------
    def create_schema(self, with_transactions: bool = True):
        """Create the accounts table and, optionally, the transaction tables."""
        tables = [accounts]
        if with_transactions:
            tables.extend(TRANSACTION_TABLES)
        metadata.create_all(self.engine, tables=tables)
        # schema changed, re-resolve on next access
        self._transactions_enabled = None

    def resolve_features(self) -> bool:
        """Decide once whether the transaction tables are usable."""
        if self.config.TRANSACTIONS_ENABLED is not None:
            enabled = self.config.TRANSACTIONS_ENABLED
        else:
            try:
                inspector = inspect(self.engine)
                enabled = all(inspector.has_table(name) for name in TRANSACTION_TABLE_NAMES)
            except SQLAlchemyError as e:
                logger.warning("Could not inspect schema, transaction history disabled: %s", e)
                enabled = False
        self._transactions_enabled = enabled
        logger.info("Transaction history %s", "enabled" if enabled else "disabled")
        return enabled

    @property
    def transactions_enabled(self) -> bool:
        if self._transactions_enabled is None:
            return self.resolve_features()
        return self._transactions_enabled
