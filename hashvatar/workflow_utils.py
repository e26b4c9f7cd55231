"""
Workflow utilities: logging setup and structured (JSON) log lines for scripts.
"""
import json
import logging
from typing import Any

logger = logging.getLogger(__name__)


def setup_logging(level: str | int = "INFO") -> None:
    """Configure root logging once for a script run."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def log_structured(level: str, **kwargs: Any) -> None:
    """Emit structured (JSON) log line."""
    record = {"level": level, **kwargs}
    line = json.dumps(record, default=str)
    if level == "error":
        logger.error("%s", line)
    elif level == "warning":
        logger.warning("%s", line)
    else:
        logger.info("%s", line)
