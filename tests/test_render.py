"""Tests for navigation and page rendering."""

import pytest
from pathlib import Path

from statica_pkg.config import Page, SiteConfig
from statica_pkg.fonts import font_url
from statica_pkg.render import PageRenderer, build_nav, inject_nav


def make_renderer(config, fonts_url='', **kwargs):
    return PageRenderer(
        config, fonts_url, build_nav(config.pages, escape=kwargs.get('escape', False)),
        'acme.css', 'acme.js', **kwargs
    )


class TestNavigation:
    """Test cases for the navigation fragment."""

    def test_shallow_pages_included_in_order(self):
        pages = [Page('/', 'Home', ''), Page('/about/', 'About', ''), Page('/blog', 'Blog', '')]
        assert build_nav(pages) == '<a href="/">Home</a><a href="/about/">About</a><a href="/blog">Blog</a>'

    def test_deep_pages_excluded(self):
        pages = [Page('/a/', 'A', ''), Page('/a/b/c/', 'C', ''), Page('/a/b/', 'B', '')]
        nav = build_nav(pages)
        assert '<a href="/a/">A</a>' in nav
        assert '/a/b/c/' not in nav
        # '/a/b/' splits into four tokens as well
        assert '/a/b/' not in nav

    def test_empty(self):
        assert build_nav([]) == ''

    def test_escaped_titles_and_paths(self):
        pages = [Page('/a&b/', 'Q&A <b>now</b>', ''), Page('/"q"/', 'Quote', '')]
        assert build_nav(pages, escape=True) == (
            '<a href="/a&amp;b/">Q&amp;A &lt;b&gt;now&lt;/b&gt;</a>'
            '<a href="/&#34;q&#34;/">Quote</a>'
        )

    def test_unescaped_by_default(self):
        assert build_nav([Page('/', 'Q&A <b>now</b>', '')]) == '<a href="/">Q&A <b>now</b></a>'

    def test_inject_nav_replaces_every_placeholder(self):
        content = '<nav></nav><div></div><nav></nav>'
        assert inject_nav(content, '<a href="/">Home</a>') == (
            '<nav><a href="/">Home</a></nav><div></div><nav><a href="/">Home</a></nav>'
        )

    def test_inject_nav_leaves_filled_nav(self):
        assert inject_nav('<nav>x</nav>', 'y') == '<nav>x</nav>'


class TestPageRenderer:
    """Test cases for PageRenderer."""

    def test_head(self, sample_config):
        head = make_renderer(sample_config).render_head(sample_config.pages[1])

        assert '<title>About</title>' in head
        assert '<meta name="description" content="Acme widgets">' in head
        assert '<link rel="canonical" href="https://acme.test/about/">' in head
        assert '<link rel="stylesheet" href="/acme.css">' in head
        assert '<link rel="icon" href="/favicon.ico" type="image/x-icon" sizes="32x32">' in head
        assert '<link rel="icon" href="/favicon.svg" type="image/svg+xml">' in head
        assert '<link rel="apple-touch-icon" href="/apple-touch-icon.png" sizes="180x180">' in head
        assert '    <meta name="theme-color" content="#fff">' in head
        assert 'fonts.googleapis.com' not in head

    def test_root_canonical(self, sample_config):
        head = make_renderer(sample_config).render_head(sample_config.pages[0])
        assert '<link rel="canonical" href="https://acme.test/">' in head

    def test_font_block_only_with_font_url(self, sample_config):
        url = font_url({'Inter': ['regular', '700']})
        head = make_renderer(sample_config, url).render_head(sample_config.pages[0])

        assert '<link rel="preconnect" href="https://fonts.googleapis.com">' in head
        assert '<link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>' in head
        assert f'<link rel="stylesheet" href="{url}">' in head

    def test_body_with_header_and_footer(self, sample_config):
        body = make_renderer(sample_config).render_body(sample_config.pages[0])
        nav = '<nav><a href="/">Home</a><a href="/about/">About</a></nav>'

        assert f'<header><div class="logo"></div>{nav}</header>' in body
        assert '<main><p>hi</p></main>' in body
        assert f'<footer><p>Footer</p>{nav}</footer>' in body
        assert '<script src="/acme.js"></script>' in body
        assert 'Guide' not in body

    def test_body_without_header_and_footer(self, sample_config_data):
        del sample_config_data['header']
        sample_config_data['footer'] = {'content': ''}
        config = SiteConfig.from_dict(sample_config_data)

        body = make_renderer(config).render_body(config.pages[0])

        assert '<header>' not in body
        assert '<footer>' not in body
        assert body.startswith('    <main><p>hi</p></main>')

    def test_full_document(self, sample_config):
        html = make_renderer(sample_config).render_page(sample_config.pages[0])

        assert html.startswith('<!DOCTYPE html>\n<html lang="en">\n  <head>\n    <meta charset="utf-8">')
        assert '<body class="_1b">' in html
        assert html.endswith('  </body>\n</html>')
        assert '\n\n' not in html

    def test_values_not_escaped_by_default(self, sample_config_data):
        sample_config_data['pages'] = [
            {'path': '/', 'title': 'Q&A <b>now</b>', 'content': '<script>x()</script>'}
        ]
        config = SiteConfig.from_dict(sample_config_data)
        html = make_renderer(config).render_page(config.pages[0])

        assert '<title>Q&A <b>now</b></title>' in html
        assert '<main><script>x()</script></main>' in html

    def test_escape_mode(self, sample_config_data):
        sample_config_data['meta']['description'] = 'Fish & "chips"'
        sample_config_data['pages'] = [
            {'path': '/', 'title': 'Q&A <b>now</b>', 'content': '<p>raw & ready</p>'}
        ]
        config = SiteConfig.from_dict(sample_config_data)
        html = make_renderer(config, escape=True).render_page(config.pages[0])

        assert '<title>Q&amp;A &lt;b&gt;now&lt;/b&gt;</title>' in html
        assert 'content="Fish &amp; &#34;chips&#34;"' in html
        assert '<main><p>raw & ready</p></main>' in html
        assert '<meta name="theme-color" content="#fff">' in html
        assert '<a href="/">Q&amp;A &lt;b&gt;now&lt;/b&gt;</a>' in html

    def test_escape_mode_nav_titles(self, sample_config_data):
        sample_config_data['header'] = {'content': '<nav></nav>'}
        sample_config_data['pages'] = [
            {'path': '/', 'title': 'Home', 'content': ''},
            {'path': '/x/', 'title': '<img src=x onerror=alert(1)>', 'content': ''},
        ]
        config = SiteConfig.from_dict(sample_config_data)
        html = make_renderer(config, escape=True).render_page(config.pages[0])

        assert '<img src=x' not in html
        assert '<nav><a href="/">Home</a><a href="/x/">&lt;img src=x onerror=alert(1)&gt;</a></nav>' in html

    def test_markdown_page(self, sample_config):
        renderer = make_renderer(sample_config)
        page = Page('/notes/', 'Notes', markdown='# Notes\n\nSome *text*.')

        body = renderer.render_body(page)

        assert '<h1>Notes</h1>' in body
        assert '<em>text</em>' in body

    def test_markdown_code_block(self, sample_config):
        renderer = make_renderer(sample_config)
        page = Page('/code/', 'Code', markdown='```\n<tag>\n```')

        assert '<pre style="white-space: pre-wrap;"><code>&lt;tag&gt;' in renderer.page_content(page)

    def test_custom_template_overrides_bundled(self, sample_config, temp_dir):
        Path(temp_dir, 'body.html').write_text('<main class="custom">{{ content }}</main>', encoding='utf-8')

        html = make_renderer(sample_config, templates_dir=temp_dir).render_page(sample_config.pages[0])

        assert '<main class="custom"><p>hi</p></main>' in html
        assert '<title>Home</title>' in html
