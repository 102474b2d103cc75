"""
Statica - a static site builder.

Statica reads one JSON configuration describing pages, metadata and shared
assets, and writes a directory of static HTML pages together with the site
stylesheet and script, robots.txt and sitemap.xml.
"""

__version__ = "1.0.0"

from .config import SiteConfig, Page, load_site_config
from .core import Statica
from .errors import StaticaError, ConfigError, BuildError
from .fonts import font_url
from .paths import path_hash

__all__ = [
    'Statica', 'SiteConfig', 'Page', 'load_site_config',
    'StaticaError', 'ConfigError', 'BuildError',
    'font_url', 'path_hash',
]
