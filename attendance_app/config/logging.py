"""
Logging configuration for the attendance analytics system.
Provides structured logging with different handlers and formatters.
"""

import copy
import logging
import logging.config
import os
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pythonjsonlogger import jsonlogger

from attendance_app.config.settings import Settings, settings as default_settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with additional fields"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]):
        """Add custom fields to the log record"""
        super().add_fields(log_record, record, message_dict)

        log_record['timestamp'] = datetime.now(timezone.utc).isoformat()
        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['environment'] = default_settings.ENVIRONMENT

        # Student context is attached by services through `extra=`
        if hasattr(record, 'student_id'):
            log_record['student_id'] = record.student_id

        if record.exc_info:
            log_record['exception'] = {
                'type': record.exc_info[0].__name__,
                'message': str(record.exc_info[1]),
                'traceback': self.formatException(record.exc_info)
            }


# Create logging config dictionary
LOGGING_CONFIG: Dict[str, Any] = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'standard': {
            'format': '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
        },
        'json': {
            '()': CustomJsonFormatter,
            'format': '%(timestamp)s %(level)s %(logger)s %(message)s'
        },
        'colored': {
            '()': 'colorlog.ColoredFormatter',
            'format': '%(log_color)s%(asctime)s [%(levelname)s] %(name)s: %(message)s',
            'log_colors': {
                'DEBUG': 'cyan',
                'INFO': 'green',
                'WARNING': 'yellow',
                'ERROR': 'red',
                'CRITICAL': 'red,bg_white',
            }
        }
    },
    'handlers': {
        'console': {
            'level': 'DEBUG',
            'class': 'logging.StreamHandler',
            'formatter': 'standard'
        },
    },
    'loggers': {
        '': {  # Root logger
            'handlers': ['console'],
            'level': 'INFO',
            'propagate': True
        },
        'attendance_app': {  # Application logger
            'handlers': ['console'],
            'level': 'INFO',
            'propagate': False
        },
        'sqlalchemy.engine': {  # SQL query logger
            'handlers': ['console'],
            'level': 'WARNING',
            'propagate': False
        },
    }
}


def build_logging_config(config: Optional[Settings] = None) -> Dict[str, Any]:
    """
    Build a dictConfig mapping for the given settings.

    Console output is colored in development and JSON when LOG_JSON is set.
    File handlers are only added when LOG_TO_FILE is enabled.
    """
    config = config or default_settings
    logging_config = copy.deepcopy(LOGGING_CONFIG)

    console = logging_config['handlers']['console']
    console['level'] = 'DEBUG' if config.DEBUG else config.LOG_LEVEL
    if config.LOG_JSON:
        console['formatter'] = 'json'
    elif config.is_development():
        console['formatter'] = 'colored'

    handler_names = ['console']
    if config.LOG_TO_FILE:
        logging_config['handlers']['file'] = {
            'level': 'INFO',
            'class': 'logging.handlers.RotatingFileHandler',
            'filename': os.path.join(config.LOG_DIR, 'attendance.log'),
            'maxBytes': 10485760,  # 10MB
            'backupCount': 10,
            'formatter': 'standard',
            'encoding': 'utf8'
        }
        logging_config['handlers']['json_file'] = {
            'level': 'INFO',
            'class': 'logging.handlers.RotatingFileHandler',
            'filename': os.path.join(config.LOG_DIR, 'attendance.json.log'),
            'maxBytes': 10485760,  # 10MB
            'backupCount': 10,
            'formatter': 'json',
            'encoding': 'utf8'
        }
        handler_names += ['file', 'json_file']

    for name in ('', 'attendance_app'):
        logging_config['loggers'][name]['handlers'] = list(handler_names)
        logging_config['loggers'][name]['level'] = config.LOG_LEVEL

    return logging_config


def setup_logging(config: Optional[Settings] = None) -> logging.Logger:
    """Configure application logging"""
    config = config or default_settings
    if config.LOG_TO_FILE:
        os.makedirs(config.LOG_DIR, exist_ok=True)

    logging.config.dictConfig(build_logging_config(config))
    logger = logging.getLogger("attendance_app")
    logger.info(f"Logging initialized with level: {config.LOG_LEVEL}")
    return logger
