"""
Logging setup. Use this as 'from .logger import log'
"""

import loguru

from .settings import settings

settings.log_settings.setup_logs(settings.log_level)
loguru.logger.debug("Logging set up.")

log = loguru.logger
