import logging
import os
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)


def _log_level(value, default):
    level = (value or default).upper()
    # getLevelName maps known names to their int and returns a string otherwise
    if not isinstance(logging.getLevelName(level), int):
        logger.warning("unknown LOG_LEVEL %r, using %s", value, default)
        return default
    return level


@dataclass(frozen=True)
class Settings:
    table_name: str = "CourseTable"
    log_level: str = "INFO"
    region: Optional[str] = None
    endpoint_url: Optional[str] = None

    @classmethod
    def from_env(cls, environ=None):
        env = os.environ if environ is None else environ
        return cls(
            table_name=env.get("TABLE_NAME") or cls.table_name,
            log_level=_log_level(env.get("LOG_LEVEL"), cls.log_level),
            region=env.get("AWS_REGION") or None,
            endpoint_url=env.get("DYNAMODB_ENDPOINT_URL") or None,
        )
