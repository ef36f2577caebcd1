"""
Logging Configuration
=====================

Central logging setup for simulator runs. Library modules only create
module-level loggers; applications call setup_logging() once at startup.
"""

import logging
import logging.config
from pathlib import Path


def setup_logging(default_level=logging.INFO, log_dir="logs"):
    """
    Configure console and rotating file logging.

    Args:
        default_level: Root logger level
        log_dir: Directory for swarmsim.log and error.log; console only
            when None
    """
    handlers = {
        'console': {
            'class': 'logging.StreamHandler',
            'level': 'INFO',
            'formatter': 'standard',
            'stream': 'ext://sys.stdout',
        },
    }

    if log_dir is not None:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        handlers['file'] = {
            'class': 'logging.handlers.RotatingFileHandler',
            'level': 'DEBUG',
            'formatter': 'detailed',
            'filename': str(log_path / 'swarmsim.log'),
            'maxBytes': 10485760,  # 10 MB
            'backupCount': 5,
            'encoding': 'utf8',
        }
        handlers['error_file'] = {
            'class': 'logging.handlers.RotatingFileHandler',
            'level': 'ERROR',
            'formatter': 'detailed',
            'filename': str(log_path / 'error.log'),
            'maxBytes': 10485760,
            'backupCount': 5,
            'encoding': 'utf8',
        }

    config = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'standard': {
                'format': '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
                'datefmt': '%Y-%m-%d %H:%M:%S',
            },
            'detailed': {
                'format': '%(asctime)s [%(levelname)s] %(name)s (%(filename)s:%(lineno)d): %(message)s',
                'datefmt': '%Y-%m-%d %H:%M:%S',
            },
        },
        'handlers': handlers,
        'loggers': {
            '': {
                'handlers': list(handlers),
                'level': default_level,
            },
            # Per-burn and per-tick detail
            'swarmsim.maneuvers': {
                'level': 'DEBUG' if log_dir is not None else default_level,
            },
        },
    }

    logging.config.dictConfig(config)
    logging.getLogger(__name__).debug("Logging configuration applied")
