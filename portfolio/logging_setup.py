"""
Logging Setup

Rotating info/error log files for non-debug, non-testing runs.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

LOG_FORMAT = '[%(asctime)s] %(levelname)s in %(module)s: %(message)s'
MAX_BYTES = 10 * 1024 * 1024
BACKUP_COUNT = 10


def setup_logging(app):
    """Attach app.log (INFO) and error.log (ERROR) handlers to the app logger."""
    if app.debug or app.testing:
        return

    log_dir = app.config['LOG_DIR']
    os.makedirs(log_dir, exist_ok=True)
    formatter = logging.Formatter(LOG_FORMAT)

    info_handler = RotatingFileHandler(os.path.join(log_dir, 'app.log'),
                                       maxBytes=MAX_BYTES, backupCount=BACKUP_COUNT)
    info_handler.setLevel(logging.INFO)
    info_handler.setFormatter(formatter)

    error_handler = RotatingFileHandler(os.path.join(log_dir, 'error.log'),
                                        maxBytes=MAX_BYTES, backupCount=BACKUP_COUNT)
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(formatter)

    # Module loggers (portfolio.*) propagate here as well as app.logger
    package_logger = logging.getLogger('portfolio')
    for logger in (app.logger, package_logger):
        logger.addHandler(info_handler)
        logger.addHandler(error_handler)
        logger.setLevel(logging.INFO)

    app.logger.info('Application startup')
