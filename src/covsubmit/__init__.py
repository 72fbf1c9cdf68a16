import logging
from importlib.metadata import version

__version__ = version("covsubmit")

logger = logging.getLogger("covsubmit")

__all__ = ["__version__", "logger"]
