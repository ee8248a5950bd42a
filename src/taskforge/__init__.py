"""
taskforge: task records over FastAPI with filtering, search, sorting and pagination.
"""

from taskforge.core.config import Settings, get_settings
from taskforge.forge import TaskForge, create_app

__version__ = "0.1.0"

__all__ = ["Settings", "get_settings", "TaskForge", "create_app", "__version__"]
