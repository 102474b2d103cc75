"""
Output path handling: page directories, the per-page CSS hash and the
build root every artifact is written into.
"""

import os
import shutil
import logging
from contextlib import contextmanager

from .errors import BuildError

HASH_MULTIPLIER = 131
# 53 bits, the range of integers a double represents exactly
HASH_MASK = 0x1fffffffffffff
BASE36_DIGITS = '0123456789abcdefghijklmnopqrstuvwxyz'

logger = logging.getLogger('Statica')


def to_base36(value: int) -> str:
    """Render a non-negative integer in lowercase base 36."""
    if value == 0:
        return '0'
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(BASE36_DIGITS[remainder])
    return ''.join(reversed(digits))


def path_hash(path: str) -> str:
    """
    Hash a page path into the short token used in its body CSS class.

    Polynomial rolling hash over the UTF-16 code units of the path, masked to
    53 bits after every step and rendered in base 36. Stylesheets select on
    the resulting class, so the value must never change for a given path.
    """
    data = path.encode('utf-16-le', 'surrogatepass')
    value = 0
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        value = (value * HASH_MULTIPLIER + unit) & HASH_MASK
    return to_base36(value)


def relative_page_dir(path: str) -> str:
    """Strip leading and trailing slashes; the root path becomes ''."""
    return path.strip('/')


def page_output_dir(output_dir: str, path: str) -> str:
    """Directory a page's index.html is written into."""
    rel = relative_page_dir(path)
    if not rel:
        return output_dir
    return os.path.join(output_dir, rel)


class BuildRoot:
    """A freshly emptied output directory that owns every write of a build."""

    def __init__(self, path: str):
        self.path = os.path.abspath(path)

    def resolve(self, relative_path: str) -> str:
        """Absolute destination for a path relative to the root."""
        destination = os.path.abspath(os.path.join(self.path, relative_path))
        if os.path.commonpath([self.path, destination]) != self.path:
            raise BuildError(f"Path traversal attempt detected: {relative_path}")
        return destination

    def write_text(self, relative_path: str, text: str) -> str:
        """Write a text file below the root, creating directories as needed."""
        destination = self.resolve(relative_path)
        os.makedirs(os.path.dirname(destination), exist_ok=True)
        with open(destination, 'w', encoding='utf-8') as f:
            f.write(text)
        logger.debug(f"Wrote {destination}")
        return destination


@contextmanager
def build_root(path: str):
    """
    Delete and recreate the output directory, then yield it as a BuildRoot.

    Nothing is rolled back on error; a failed build leaves whatever it had
    written so far. The working directory and its ancestors are never
    accepted as the output directory.
    """
    target = os.path.realpath(path)
    if os.path.commonpath([target, os.path.realpath(os.getcwd())]) == target:
        raise BuildError(f"Refusing to delete output directory {path}: it contains the working directory")
    if os.path.exists(path):
        shutil.rmtree(path)
    os.makedirs(path)
    logger.debug(f"Cleaned output directory {os.path.abspath(path)}")
    yield BuildRoot(path)
