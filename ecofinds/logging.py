import logging.config

from .core.config import settings

logging.config.fileConfig(settings.LOG_CONFIG_FILE, disable_existing_loggers=False)


logger = logging.getLogger("ecofinds")
