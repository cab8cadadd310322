import logging.config
from typing import Optional

from jobfill.config import settings

LOGGING_CONFIG = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'standard': {
            'format': '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
        },
    },
    'handlers': {
        'default': {
            'level': 'DEBUG',
            'formatter': 'standard',
            'class': 'logging.StreamHandler',
            'stream': 'ext://sys.stderr',
        },
    },
    'loggers': {
        '': {  # root logger
            'handlers': ['default'],
            'level': 'WARNING',
            'propagate': True
        },
        'pdfminer': {
            'handlers': ['default'],
            'level': 'WARNING',
            'propagate': False
        },
        'jobfill': {
            'handlers': ['default'],
            'level': 'INFO',
            'propagate': False
        }
    }
}


def setup_logging(level: Optional[str] = None):
    """Configure logging for the command line tool"""
    config = {**LOGGING_CONFIG, 'loggers': {k: dict(v) for k, v in LOGGING_CONFIG['loggers'].items()}}
    config['loggers']['jobfill']['level'] = (level or settings.log_level).upper()
    logging.config.dictConfig(config)
