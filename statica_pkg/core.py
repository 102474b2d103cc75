import os
import time
import logging
from datetime import datetime

import csscompressor
import rjsmin

from .config import SiteConfig
from .fonts import font_url
from .paths import BuildRoot, build_root, page_output_dir, relative_page_dir
from .render import PageRenderer, build_nav

ASSET_NAMING_SITE = 'site'
ASSET_NAMING_LEGACY = 'legacy'
LEGACY_CSS_FILE = 'styles.css'
LEGACY_JS_FILE = 'main.js'


class InfoFilter(logging.Filter):
    """Filter to allow only selected INFO messages to be shown in the console."""
    def filter(self, record):
        if record.levelno >= logging.WARNING:
            return True
        allowed_messages = [
            "Site build completed in",
            "Total pages generated:",
            "Writing assets",
            "Building pages",
            "Generating robots.txt",
            "Generating XML sitemap",
        ]
        return any(msg in record.getMessage() for msg in allowed_messages)


class Statica:
    def __init__(self, config: SiteConfig, output_dir='build', templates_dir=None, minify=False,
                 asset_naming=ASSET_NAMING_SITE, escape=False, log_dir='logs'):
        if asset_naming not in (ASSET_NAMING_SITE, ASSET_NAMING_LEGACY):
            raise ValueError(f"Unknown asset naming: {asset_naming}")

        self.config = config
        self.output_dir = output_dir
        self.templates_dir = templates_dir
        self.minify = minify
        self.asset_naming = asset_naming
        self.escape = escape
        self.log_dir = log_dir
        self.pages_generated = 0

        self.setup_logging()

        if asset_naming == ASSET_NAMING_LEGACY:
            self.css_file, self.js_file = LEGACY_CSS_FILE, LEGACY_JS_FILE
        else:
            self.css_file, self.js_file = f"{config.sid}.css", f"{config.sid}.js"

        self.font_url = font_url(config.fonts)
        self.nav = build_nav(config.pages, escape=escape)
        self.renderer = PageRenderer(
            config, self.font_url, self.nav, self.css_file, self.js_file,
            templates_dir=templates_dir, escape=escape
        )

    def setup_logging(self):
        """Set up logging configuration."""
        self.logger = logging.getLogger('Statica')
        self.logger.setLevel(logging.DEBUG)

        if not self.logger.handlers:
            # Console handler with filter
            console_handler = logging.StreamHandler()
            console_handler.setLevel(logging.INFO)
            console_handler.addFilter(InfoFilter())
            console_formatter = logging.Formatter('%(message)s')
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

            # File handler for all logs
            if self.log_dir:
                os.makedirs(self.log_dir, exist_ok=True)
                log_filename = datetime.now().strftime('statica_%Y-%m-%d_%H-%M-%S.log')
                log_filepath = os.path.join(self.log_dir, log_filename)

                file_handler = logging.FileHandler(log_filepath, encoding='utf-8')
                file_handler.setLevel(logging.DEBUG)
                file_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
                file_handler.setFormatter(file_formatter)
                self.logger.addHandler(file_handler)

    def write_assets(self, root: BuildRoot):
        """Write the global stylesheet and script."""
        self.logger.info(f"Writing assets {self.css_file} and {self.js_file}")
        css, js = self.config.css, self.config.js
        if self.minify:
            css = csscompressor.compress(css)
            js = rjsmin.jsmin(js)
            self.logger.debug("Minified CSS and JS")
        root.write_text(self.css_file, css)
        root.write_text(self.js_file, js)

    def build_pages(self, root: BuildRoot):
        """Render every page into <path>/index.html."""
        self.logger.info(f"Building pages ({len(self.config.pages)})")
        seen = {}
        for page in self.config.pages:
            page_dir = page_output_dir(root.path, page.path)
            if page_dir in seen:
                rel = relative_page_dir(page.path)
                self.logger.warning(
                    f"Pages {seen[page_dir]} and {page.path} share output directory '/{rel}'; "
                    f"{page.path} overwrites it"
                )
            seen[page_dir] = page.path

            html = self.renderer.render_page(page)
            root.write_text(os.path.join(page_dir, 'index.html'), html)
            self.pages_generated += 1

    def generate_robots_txt(self, root: BuildRoot):
        """Generate robots.txt when the project enables it."""
        mode = self.config.project.robots
        if not mode:
            return None

        if mode == 'private':
            robots_content = "User-agent: *\nDisallow: /"
        else:
            robots_content = "User-agent: *\nAllow: /"
            if self.config.project.sitemap:
                robots_content += f"\nSitemap: {self.config.project.sitemap}"

        self.logger.info("Generating robots.txt")
        return root.write_text('robots.txt', robots_content)

    def generate_xml_sitemap(self, root: BuildRoot):
        """Generate sitemap.xml with one entry per page, in page order."""
        if not self.config.project.sitemap:
            return None

        canonical = self.config.meta.canonical
        sitemap_content = self.renderer.env.get_template('sitemap.xml').render(
            locations=[f"{canonical}{page.path}" for page in self.config.pages]
        )
        self.logger.info("Generating XML sitemap")
        return root.write_text('sitemap.xml', sitemap_content)

    def build(self):
        """Main build process."""
        start_time = time.time()
        self.logger.debug(f"Starting site build into {os.path.abspath(self.output_dir)}")

        with build_root(self.output_dir) as root:
            self.write_assets(root)
            self.build_pages(root)
            self.generate_robots_txt(root)
            self.generate_xml_sitemap(root)

        total_time = time.time() - start_time
        self.logger.info(f"Site build completed in {total_time:.6f} seconds.")
        self.logger.info(f"Total pages generated: {self.pages_generated}")
