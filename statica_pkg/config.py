"""
Site configuration for Statica.

The configuration is a single JSON (or YAML) document:

    {
      "sid": "site",
      "css": "...", "js": "...",
      "meta": {"description": "...", "canonical": "https://example.com/",
               "headTags": ["..."], "fonts": {"Open Sans": ["regular", "700"]}},
      "header": {"content": "<nav></nav>"},
      "footer": {"content": "..."},
      "project": {"robots": true, "sitemap": "https://example.com/sitemap.xml"},
      "pages": [{"path": "/", "title": "Home", "content": "<p>hi</p>"}]
    }

It is loaded once per build into the frozen dataclasses below.
"""

import os
import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml

from .errors import ConfigError
from .fonts import normalize_font_spec


@dataclass(frozen=True)
class Fragment:
    """Shared HTML placed in the page header or footer."""
    content: str

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional['Fragment']:
        if not data or not data.get('content'):
            return None
        return cls(content=str(data['content']))


@dataclass(frozen=True)
class Meta:
    description: str
    canonical: str
    head_tags: Tuple[str, ...] = ()
    fonts: Any = None


@dataclass(frozen=True)
class Project:
    robots: Union[bool, str] = False
    sitemap: Optional[str] = None


@dataclass(frozen=True)
class Page:
    """One routable page. `content` is HTML; `markdown` is converted when rendering."""
    path: str
    title: str
    content: Optional[str] = None
    markdown: Optional[str] = None


@dataclass(frozen=True)
class SiteConfig:
    sid: str
    meta: Meta
    pages: Tuple[Page, ...]
    css: str = ''
    js: str = ''
    header: Optional[Fragment] = None
    footer: Optional[Fragment] = None
    project: Project = field(default_factory=Project)
    fonts: Dict[str, List[str]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SiteConfig':
        """
        Validate a parsed configuration document and build a SiteConfig.

        Raises:
            ConfigError: If a required field is missing or has the wrong shape
        """
        if not isinstance(data, dict):
            raise ConfigError("Configuration must be an object at the top level")

        meta_data = _require(data, 'meta', 'configuration')
        if not isinstance(meta_data, dict):
            raise ConfigError("'meta' must be an object")
        head_tags = meta_data.get('headTags') or []
        if isinstance(head_tags, str):
            head_tags = [head_tags]
        meta = Meta(
            description=str(_require(meta_data, 'description', 'meta')),
            canonical=str(_require(meta_data, 'canonical', 'meta')),
            head_tags=tuple(str(tag) for tag in head_tags),
            fonts=meta_data.get('fonts'),
        )

        # meta.fonts is the canonical location; top-level fonts is accepted
        # for configs written against the older layout.
        fonts = meta.fonts if meta.fonts is not None else data.get('fonts')

        project_data = data.get('project') or {}
        project = Project(
            robots=project_data.get('robots') or False,
            sitemap=project_data.get('sitemap') or None,
        )

        pages_data = _require(data, 'pages', 'configuration')
        if not isinstance(pages_data, list):
            raise ConfigError("'pages' must be a list")

        return cls(
            sid=str(_require(data, 'sid', 'configuration')),
            css=data.get('css') or '',
            js=data.get('js') or '',
            meta=meta,
            header=Fragment.from_dict(data.get('header')),
            footer=Fragment.from_dict(data.get('footer')),
            project=project,
            pages=tuple(_parse_page(entry, index) for index, entry in enumerate(pages_data)),
            fonts=normalize_font_spec(fonts),
        )


def _require(data: Dict[str, Any], key: str, where: str) -> Any:
    if data.get(key) is None:
        raise ConfigError(f"Missing required field '{key}' in {where}")
    return data[key]


def _parse_page(entry: Any, index: int) -> Page:
    where = f"page {index}"
    if not isinstance(entry, dict):
        raise ConfigError(f"Invalid {where}: expected an object")
    path = str(_require(entry, 'path', where))
    if not path.startswith('/'):
        raise ConfigError(f"Invalid {where}: path '{path}' must start with '/'")
    content = entry.get('content')
    markdown = entry.get('markdown')
    if content is None and markdown is None:
        raise ConfigError(f"Missing required field 'content' in {where} ({path})")
    return Page(
        path=path,
        title=str(_require(entry, 'title', where)),
        content=None if content is None else str(content),
        markdown=None if markdown is None else str(markdown),
    )


def read_config_file(config_path: str) -> Dict[str, Any]:
    """
    Read a JSON or YAML document from disk.

    Args:
        config_path: Path to a .json, .yml or .yaml file

    Returns:
        The parsed document
    """
    file_ext = os.path.splitext(config_path)[1].lower()
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            if file_ext in ['.yml', '.yaml']:
                return yaml.safe_load(f) or {}
            return json.load(f)
    except FileNotFoundError:
        raise ConfigError(f"Configuration file not found: {config_path}")
    except PermissionError:
        raise ConfigError(f"Permission denied reading configuration file: {config_path}")
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in configuration file {config_path}: {e}")
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in configuration file {config_path}: {e}")
    except (IOError, OSError) as e:
        raise ConfigError(f"Error reading configuration file {config_path}: {e}")


def load_site_config(config_path: str) -> SiteConfig:
    """Load and validate the site configuration at config_path."""
    return SiteConfig.from_dict(read_config_file(config_path))
