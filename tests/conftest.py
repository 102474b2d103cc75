"""Test configuration and fixtures for Statica tests."""

import json
import logging
import pytest
import tempfile
import shutil
import os
import copy
from pathlib import Path

import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from statica_pkg.config import SiteConfig


SAMPLE_CONFIG = {
    'sid': 'acme',
    'css': 'body {  margin: 0;  }\n',
    'js': 'console.log("hi");\n',
    'meta': {
        'description': 'Acme widgets',
        'canonical': 'https://acme.test/',
        'headTags': ['<meta name="theme-color" content="#fff">'],
    },
    'header': {'content': '<div class="logo"></div><nav></nav>'},
    'footer': {'content': '<p>Footer</p><nav></nav>'},
    'project': {
        'robots': True,
        'sitemap': 'https://acme.test/sitemap.xml',
    },
    'pages': [
        {'path': '/', 'title': 'Home', 'content': '<p>hi</p>'},
        {'path': '/about/', 'title': 'About', 'content': '<p>About us</p>'},
        {'path': '/docs/guide/', 'title': 'Guide', 'content': '<p>Guide</p>'},
    ],
}


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_dir = tempfile.mkdtemp()
    yield temp_dir
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def sample_config_data():
    """A complete configuration document as parsed from JSON."""
    return copy.deepcopy(SAMPLE_CONFIG)


@pytest.fixture
def sample_config(sample_config_data):
    """The sample configuration as a SiteConfig."""
    return SiteConfig.from_dict(sample_config_data)


@pytest.fixture
def config_file(temp_dir, sample_config_data):
    """Write the sample configuration to config.json."""
    path = Path(temp_dir) / 'config.json'
    path.write_text(json.dumps(sample_config_data), encoding='utf-8')
    return str(path)


@pytest.fixture
def output_dir(temp_dir):
    """Output directory path inside the temporary directory (not created)."""
    return os.path.join(temp_dir, 'build')


@pytest.fixture(autouse=True)
def reset_statica_logger():
    """Remove handlers Statica attached so each test configures logging afresh."""
    yield
    logger = logging.getLogger('Statica')
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
