# =======================================================================================
# app/logging_config.py - Logging Setup
# =======================================================================================
import logging
from .config import Config

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(cfg: Config):
    level = logging.DEBUG if cfg.API_DEBUG else getattr(logging, cfg.LOG_LEVEL, logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("app").setLevel(level)
    # SQL echo only when debugging
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if cfg.API_DEBUG else logging.WARNING)
