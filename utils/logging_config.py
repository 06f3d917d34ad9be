import logging
import os

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Third-party loggers that flood DEBUG output with connection-pool noise
NOISY_LOGGERS = ('urllib3', 'charset_normalizer')


def _resolve_level(log_level):
    """Turn a level name from the CLI, config.py or the environment into a
    logging constant.  Unknown names resolve to INFO."""
    if log_level is None:
        try:
            from config import LOG_LEVEL
            log_level = LOG_LEVEL
        except ImportError:
            log_level = 'INFO'

    level = logging.getLevelName(str(log_level).upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(log_file=None, log_level=None):
    """
    Configure the root logger for the client, CLI and REST server

    Args:
        log_file: Append log lines to this file as well (optional)
        log_level: Level name (optional, falls back to LOG_LEVEL in config.py)

    Returns:
        The root logger
    """
    level = _resolve_level(log_level)
    formatter = logging.Formatter(LOG_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handlers = [logging.StreamHandler()]
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, mode='a', encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root_logger


def get_logger(name):
    """
    Get a logger with the specified name

    Args:
        name: Logger name (usually __name__)
    """
    return logging.getLogger(name)
