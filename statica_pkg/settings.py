#!/usr/bin/env python3
"""
Build settings for Statica.
Supports configuration from statica.yml, statica.yaml, or statica.json files.
"""

import os
import json
import yaml
from typing import Dict, Any, Optional

from .errors import ConfigError


SAMPLE_SITE_CONFIG = {
    'sid': 'site',
    'css': 'body { font-family: "Open Sans", sans-serif; margin: 0; }',
    'js': '',
    'meta': {
        'description': 'Built with Statica',
        'canonical': 'https://example.com/',
        'headTags': ['<meta name="viewport" content="width=device-width, initial-scale=1">'],
        'fonts': {'Open Sans': ['regular', '700']},
    },
    'header': {'content': '<nav></nav>'},
    'footer': {'content': '<p>&copy; Example</p>'},
    'project': {
        'robots': True,
        'sitemap': 'https://example.com/sitemap.xml',
    },
    'pages': [
        {'path': '/', 'title': 'Home', 'content': '<h1>Welcome</h1>'},
        {'path': '/about/', 'title': 'About', 'content': '<h1>About</h1>'},
    ],
}


class StaticaSettings:
    """Load and manage Statica build settings."""

    # Default configuration
    DEFAULT_SETTINGS = {
        'config': 'config.json',
        'output': 'build',
        'templates': None,
        'minify': False,
        'asset_naming': 'site',
        'escape': False,
        'log_dir': 'logs',
    }

    # Settings file names to look for (in order of preference)
    CONFIG_FILES = ['statica.yml', 'statica.yaml', 'statica.json']

    def __init__(self, config_dir: str = None):
        """
        Initialize settings loader.

        Args:
            config_dir: Directory to look for settings files. Defaults to current directory.
        """
        self.config_dir = config_dir or os.getcwd()
        self.settings = self.DEFAULT_SETTINGS.copy()
        self.config_file_path = None

    def load_settings(self) -> Dict[str, Any]:
        """
        Load settings from a settings file if one exists.

        Returns:
            Dictionary of build settings
        """
        config_file = self._find_config_file()

        if config_file:
            self.config_file_path = config_file
            loaded_settings = self._load_config_file(config_file)
            if not isinstance(loaded_settings, dict):
                raise ConfigError(f"Settings file {config_file} must contain a mapping")
            unknown = set(loaded_settings) - set(self.DEFAULT_SETTINGS)
            if unknown:
                raise ConfigError(f"Unknown settings in {config_file}: {', '.join(sorted(unknown))}")
            self.settings.update(loaded_settings)

        return self.settings.copy()

    def _find_config_file(self) -> Optional[str]:
        """
        Find the first available settings file.

        Returns:
            Path to settings file or None if not found
        """
        for filename in self.CONFIG_FILES:
            config_path = os.path.join(self.config_dir, filename)
            if os.path.exists(config_path):
                return config_path
        return None

    def _load_config_file(self, config_path: str) -> Dict[str, Any]:
        file_ext = os.path.splitext(config_path)[1].lower()
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                if file_ext in ['.yml', '.yaml']:
                    return yaml.safe_load(f) or {}
                return json.load(f) or {}
        except PermissionError:
            raise ConfigError(f"Permission denied reading settings file: {config_path}")
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in settings file {config_path}: {e}")
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in settings file {config_path}: {e}")
        except (IOError, OSError) as e:
            raise ConfigError(f"Error reading settings file {config_path}: {e}")

    def create_sample_config(self, file_format: str = 'json') -> str:
        """
        Create a starter site configuration.

        Args:
            file_format: Format for the config file ('json', 'yml' or 'yaml')

        Returns:
            Path to the created file
        """
        filename = f'config.{file_format}'
        config_path = os.path.join(self.config_dir, filename)
        if os.path.exists(config_path):
            raise FileExistsError(f"Configuration file already exists: {config_path}")

        try:
            with open(config_path, 'w', encoding='utf-8') as f:
                if file_format in ['yml', 'yaml']:
                    f.write("# Statica site configuration\n")
                    yaml.safe_dump(SAMPLE_SITE_CONFIG, f, sort_keys=False, allow_unicode=True)
                else:
                    json.dump(SAMPLE_SITE_CONFIG, f, indent=2)
                    f.write('\n')
        except PermissionError:
            raise PermissionError(f"Permission denied creating configuration file: {config_path}")

        return config_path

    def merge_with_args(self, args_dict: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge settings with command-line arguments.
        Command-line arguments take precedence over settings file values.

        Args:
            args_dict: Dictionary of command-line arguments

        Returns:
            Merged settings dictionary
        """
        merged = self.settings.copy()

        for key, value in args_dict.items():
            if value is not None and key in self.DEFAULT_SETTINGS:
                merged[key] = value

        return merged
