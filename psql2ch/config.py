"""
Converter settings and logging configuration.

CONVERTER_CONFIG names the constants used by the mapping rules.
LOGGING is a logging.config.dictConfig dictionary; the library never
applies it on import, only the command-line front end does.
"""

import logging.config
from typing import Optional

# Sentinel emitted by the best-effort paths (Kafka engine and Athena types)
NOT_IMPLEMENTED_TYPE = 'NotImplementedType!'

CONVERTER_CONFIG = {
    # Columns whose name ends with this suffix are guessed as keys
    'GUESSED_PRIMARY_KEY_SUFFIX': '_id',

    # numeric columns without precision
    'DEFAULT_DECIMAL_PRECISION': 38,
    'DEFAULT_DECIMAL_SCALE': 19,

    # Joins source column names into the schema identifier
    'ID_SEPARATOR': '_',
}

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{asctime} {levelname} {name} {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'stream': 'ext://sys.stderr',
            'formatter': 'verbose',
        },
    },
    'loggers': {
        'psql2ch': {
            'handlers': ['console'],
            'level': 'WARNING',
            'propagate': True,
        },
    },
}


def configure_logging(level: Optional[str] = None) -> None:
    """
    Apply the LOGGING dict-config.

    Args:
        level: Optional level name overriding the 'psql2ch' logger level
    """
    config = {
        **LOGGING,
        'loggers': {name: dict(opts) for name, opts in LOGGING['loggers'].items()},
    }
    if level:
        config['loggers']['psql2ch']['level'] = level.upper()
    logging.config.dictConfig(config)
