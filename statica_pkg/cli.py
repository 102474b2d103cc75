#!/usr/bin/env python3
"""
Command-line interface for Statica - static site builder.
"""

import os
import sys
import argparse

from . import __version__
from .config import load_site_config
from .core import Statica, ASSET_NAMING_LEGACY
from .settings import StaticaSettings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Statica - Static Site Builder')
    parser.add_argument('--config', type=str,
                        help='Site configuration file (JSON or YAML)')
    parser.add_argument('--output', type=str,
                        help='Output directory for the generated site (deleted and recreated)')
    parser.add_argument('--templates', type=str,
                        help='Directory with templates overriding the bundled ones')
    parser.add_argument('--minify', action='store_true', default=None,
                        help='Minify the global CSS and JS')
    parser.add_argument('--legacy-assets', dest='asset_naming', action='store_const',
                        const=ASSET_NAMING_LEGACY,
                        help='Write styles.css and main.js instead of <sid>.css and <sid>.js')
    parser.add_argument('--escape', action='store_true', default=None,
                        help='HTML-escape titles, descriptions, canonical URLs and navigation links')
    parser.add_argument('--log-dir', type=str,
                        help='Directory for build log files')
    parser.add_argument('--init', type=str, choices=['json', 'yml', 'yaml'],
                        help='Create a sample site configuration file')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def main(argv=None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    try:
        settings_loader = StaticaSettings()

        # Handle init command
        if args.init:
            config_path = settings_loader.create_sample_config(args.init)
            print(f"Created sample configuration file: {os.path.relpath(config_path)}")
            print("Edit it, then run 'statica' to build your site.")
            return

        settings_loader.load_settings()

        # Command line arguments take precedence
        args_dict = {k: v for k, v in vars(args).items() if v is not None}
        final_settings = settings_loader.merge_with_args(args_dict)

        output_dir = os.path.expanduser(final_settings['output'])

        config = load_site_config(final_settings['config'])
        generator = Statica(
            config,
            output_dir=output_dir,
            templates_dir=final_settings['templates'],
            minify=final_settings['minify'],
            asset_naming=final_settings['asset_naming'],
            escape=final_settings['escape'],
            log_dir=final_settings['log_dir'],
        )
        generator.build()

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
