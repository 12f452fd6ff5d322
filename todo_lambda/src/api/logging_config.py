from __future__ import annotations

import logging.config
from typing import Any, Dict


def _dict_config(level: str) -> Dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "std": {"format": "%(asctime)s %(levelname)s %(name)s %(message)s"},
        },
        "handlers": {
            "console": {"class": "logging.StreamHandler", "formatter": "std"},
        },
        "root": {"handlers": ["console"], "level": level},
        # boto's own debug output drowns the request logs
        "loggers": {
            "botocore": {"level": "WARNING"},
            "boto3": {"level": "WARNING"},
        },
    }


# PUBLIC_INTERFACE
def configure_logging(level: str = "INFO") -> None:
    """Configure root logging with a single console handler at the given level."""
    logging.config.dictConfig(_dict_config(level))
