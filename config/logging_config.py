import logging
import os
import sys

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Level for every shortcode logger, SHORTCODE_LOG_LEVEL=DEBUG traces each pass
DEFAULT_LOG_LEVEL = os.getenv('SHORTCODE_LOG_LEVEL', 'INFO').upper()

# Per-component levels, matched by logger name prefix, e.g. {'shortcode.resolver': 'DEBUG'}
LOGGER_LEVELS = {
    # Add more components as needed
}


def _level_number(level: str) -> int:
    number = getattr(logging, level.upper(), None)
    if not isinstance(number, int):
        raise ValueError(f"Unknown log level: {level}")
    return number


def set_default_log_level(level: str):
    """
    Change the level used by loggers set up after this call.
    """
    global DEFAULT_LOG_LEVEL
    _level_number(level)
    DEFAULT_LOG_LEVEL = level.upper()


def level_for(name: str) -> str:
    """The configured level of a logger: the first matching component override, else the default."""
    for prefix, level in LOGGER_LEVELS.items():
        if name == prefix or name.startswith(prefix + '.'):
            return level
    return DEFAULT_LOG_LEVEL


def setup_logger(name: str, level: str = None) -> logging.Logger:
    """
    Return the named logger writing to stdout.
    Usage: logger = setup_logger(__name__)
    """
    logger = logging.getLogger(name)

    # Own handler below, so no propagation to the root logger
    logger.propagate = False
    logger.setLevel(_level_number(level or level_for(name)))

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
