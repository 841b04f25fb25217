import os
import logging
from dataclasses import dataclass


DEFAULT_TABLE_NAME = 'guestbook_table'
DEFAULT_LOG_LEVEL = 'INFO'


def _log_level(value):
    level = (value or DEFAULT_LOG_LEVEL).strip().upper()
    # getLevelName returns an int only for registered level names
    if not isinstance(logging.getLevelName(level), int):
        return DEFAULT_LOG_LEVEL
    return level


@dataclass(frozen=True)
class Settings:
    table_name: str = DEFAULT_TABLE_NAME
    log_level: str = DEFAULT_LOG_LEVEL
    region_name: str = None
    endpoint_url: str = None

    @classmethod
    def from_env(cls, environ=None):
        """
        Read the function configuration from the Lambda environment variables.
        Empty values are treated as unset.
        """
        environ = os.environ if environ is None else environ
        return cls(
            table_name=environ.get('TABLE_NAME') or DEFAULT_TABLE_NAME,
            log_level=_log_level(environ.get('LOG_LEVEL')),
            region_name=environ.get('AWS_REGION') or None,
            endpoint_url=environ.get('DYNAMODB_ENDPOINT_URL') or None,
        )
