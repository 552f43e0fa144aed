import logging
import os
import sys
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from src.rules.models import Rules

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings:
    """Process settings from the environment."""

    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.data_dir = Path(os.environ.get("PORTFOLIO_DATA_DIR", "./data"))
        self.db_path = str(self.data_dir / "portfolio.db")
        self.kv_path = self.data_dir / "kv_store.json"
        self.rules_path = Path(os.environ.get("PORTFOLIO_RULES_PATH", self.base_dir / "rules.yaml"))
        self.migrations_dir = str(self.base_dir / "migrations")


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)


def missing_env(rules: Rules) -> list[str]:
    return [name for name in rules.ops.required_env if name not in os.environ]


def validate_ops_rules(rules: Rules, base_dir: Path) -> None:
    """
    Validate operational requirements before startup.

    Exits the process when a required environment variable is missing or
    the configured time zone is unknown.
    """
    missing = missing_env(rules)
    if missing:
        logger.critical("Missing required environment variables: %s", ", ".join(missing))
        sys.exit(1)

    if rules.ops.timezone:
        try:
            ZoneInfo(rules.ops.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            logger.critical("Unknown time zone in ops.timezone: %s", rules.ops.timezone)
            sys.exit(1)

    logger.info("Configuration validated (base dir %s)", base_dir)
