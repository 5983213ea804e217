import logging
from rich.logging import RichHandler
from rich.console import Console

from safeurl.config.settings import settings

# Universal Console instance
console = Console(stderr=True)

def setup_logger(name="SafeUrl", level=None):
    """
    Configures a Rich logger for URL analysis.
    """
    level = level or settings.LOG_LEVEL
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, markup=False)]
    )

    logger = logging.getLogger(name)
    logger.setLevel(level)
    return logger

# Singleton Logger
log = setup_logger()
