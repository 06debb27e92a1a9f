"""
Shared utilities: settings and logging.
"""

from lemo_validator.utils.config import Settings, get_settings, settings
from lemo_validator.utils.logger import setup_logger, log_error

__all__ = ['Settings', 'get_settings', 'settings', 'setup_logger', 'log_error']
