"""sitelens - scrape visual and content features from web pages."""

__version__ = "0.1.0"

from .config import get_settings
from .main import main_api, main_cli

main = main_cli

__all__ = ["main_cli", "main_api", "main", "get_settings", "__version__"]
