import logging
import os
from pathlib import Path

from logimaster.rules.models import Rules

logger = logging.getLogger(__name__)


class ConfigurationError(RuntimeError):
    """Operational requirements are not met."""


def validate_ops_rules(rules: Rules, base_dir: Path) -> None:
    """
    Validate operational requirements before startup.
    """
    ops = rules.ops

    missing = [env_var for env_var in ops.required_env if env_var not in os.environ]
    if missing:
        raise ConfigurationError(
            f"Missing required environment variables: {', '.join(missing)}"
        )

    data_dir = os.environ.get(rules.storage.data_dir_env) or rules.storage.default_data_dir
    data_path = Path(data_dir)
    if not data_path.is_absolute():
        data_path = base_dir / data_path
    if data_path.exists() and not data_path.is_dir():
        raise ConfigurationError(f"Data path is not a directory: {data_path}")

    logger.info("Configuration validated (data dir %s)", data_path)
