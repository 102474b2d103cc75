"""
HTML rendering for Statica pages.

Pages are assembled from three Jinja2 templates: head.html and body.html hold
the two document sections and page.html wraps them. Every value from the
configuration is trusted and inserted as-is; the renderer only escapes when
it is created with escape=True.
"""

import logging
from typing import Iterable, Optional

import mistune
from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader, select_autoescape
import markupsafe
from markupsafe import Markup

from .config import Page, SiteConfig
from .paths import path_hash

NAV_PLACEHOLDER = '<nav></nav>'
# Pages whose path splits into this many '/' tokens or more stay out of the nav
NAV_MAX_SEGMENTS = 4


def build_nav(pages: Iterable[Page], escape: bool = False) -> str:
    """One anchor per shallow page, in page-list order."""
    quote = markupsafe.escape if escape else str
    return ''.join(
        f'<a href="{quote(page.path)}">{quote(page.title)}</a>'
        for page in pages
        if len(page.path.split('/')) < NAV_MAX_SEGMENTS
    )


def inject_nav(content: str, nav: str) -> str:
    """Fill every empty <nav></nav> placeholder with the navigation links."""
    return content.replace(NAV_PLACEHOLDER, f'<nav>{nav}</nav>')


def create_environment(templates_dir: Optional[str] = None, escape: bool = False) -> Environment:
    """
    Create the Jinja2 environment used for pages and the sitemap.

    Templates in templates_dir override the bundled ones by name. XML output
    is always escaped; HTML only when escape is set.
    """
    loaders = [PackageLoader('statica_pkg', 'templates')]
    if templates_dir:
        loaders.insert(0, FileSystemLoader(templates_dir))
    return Environment(
        loader=ChoiceLoader(loaders),
        autoescape=select_autoescape(
            enabled_extensions=('html', 'xml') if escape else ('xml',),
            default=escape,
        ),
        trim_blocks=True,
        lstrip_blocks=True,
    )


class PageRenderer:
    def __init__(self, config: SiteConfig, font_url: str, nav: str, css_file: str, js_file: str,
                 templates_dir: Optional[str] = None, escape: bool = False, lang: str = 'en'):
        self.config = config
        self.font_url = font_url
        self.nav = nav
        self.css_file = css_file
        self.js_file = js_file
        self.lang = lang
        self.logger = logging.getLogger('Statica')

        self.env = create_environment(templates_dir, escape)
        self.markdown_parser = self.create_markdown_parser()

        header = config.header.content if config.header else ''
        footer = config.footer.content if config.footer else ''
        self.header = Markup(inject_nav(header, nav)) if header else None
        self.footer = Markup(inject_nav(footer, nav)) if footer else None

    def create_markdown_parser(self):
        """Create a Mistune markdown parser with a custom renderer."""
        class CustomRenderer(mistune.HTMLRenderer):
            def __init__(self):
                super().__init__(escape=False)

            def block_code(self, code, info=None):
                escaped_code = mistune.escape(code)
                return '<pre style="white-space: pre-wrap;"><code>{}</code></pre>'.format(escaped_code)
        return mistune.create_markdown(
            renderer=CustomRenderer(),
            plugins=['table', 'task_lists', 'strikethrough']
        )

    def page_content(self, page: Page) -> str:
        """HTML for the page's <main>, converting markdown pages first."""
        if page.content is not None:
            return page.content
        return self.markdown_parser(page.markdown)

    def canonical_url(self, page: Page) -> str:
        return f"{self.config.meta.canonical}{page.path[1:]}"

    def _render(self, template_name: str, **context) -> str:
        return self.env.get_template(template_name).render(**context).rstrip('\n')

    def render_head(self, page: Page) -> str:
        """The contents of <head>."""
        return self._render(
            'head.html',
            title=page.title,
            description=self.config.meta.description,
            font_url=self.font_url,
            css_file=self.css_file,
            canonical_url=self.canonical_url(page),
            head_tags=[Markup(tag) for tag in self.config.meta.head_tags],
        )

    def render_body(self, page: Page) -> str:
        """The contents of <body>: header, main, footer and the site script."""
        return self._render(
            'body.html',
            header=self.header,
            content=Markup(self.page_content(page)),
            footer=self.footer,
            js_file=self.js_file,
        )

    def render_page(self, page: Page) -> str:
        """A complete HTML document for page."""
        html = self._render(
            'page.html',
            lang=self.lang,
            head=Markup(self.render_head(page)),
            body=Markup(self.render_body(page)),
            page_hash=path_hash(page.path),
        )
        self.logger.debug(f"Rendered page {page.path}")
        return html
