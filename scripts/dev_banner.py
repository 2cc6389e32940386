#!/usr/bin/env python3
"""
Banner Development Helper

Lists the banners available for development and starts the external dev
server (Vite) scoped to a single banner. The banner is selected through the
BANNER environment variable and the server runs with NODE_ENV=development.

Usage:
    python dev_banner.py list
    python dev_banner.py start 300x250-1
    python dev_banner.py 300x250-1
    BANNER=300x250-1 python dev_banner.py start
"""

import argparse
import logging
import os
import signal
import subprocess
import sys
from typing import List, Optional, Sequence

from banner_config import BannerConfig, add_common_arguments, config_from_args, setup_logging

DEV_SERVER_COMMAND = ['npx', 'vite']


class BannerDevHelper:
    """
    Development helper for running specific banners.
    """

    def __init__(self, config: Optional[BannerConfig] = None,
                 command: Optional[Sequence[str]] = None):
        self.config = config or BannerConfig()
        self.command = list(command or DEV_SERVER_COMMAND)
        self.logger = logging.getLogger(__name__)

    def available_banners(self) -> List[str]:
        """Banners with an index.html, template directories excluded."""
        if not self.config.banner_root.is_dir():
            return []
        return sorted(
            index.parent.name for index in self.config.banner_root.glob('*/index.html')
            if not self.config.is_private(index.parent.name)
        )

    def list_banners(self) -> None:
        print("📦 Available banners:")
        for banner in self.available_banners():
            print(f"  • {banner}")
        print("\n💡 Usage:")
        print("  python dev_banner.py <banner-name>")
        print("  python dev_banner.py 300x250-1")

    def start_dev(self, banner_name: Optional[str]) -> int:
        """
        Start the development server for a specific banner.

        Without a name, the banner selected through BANNER is used.

        Returns:
            Exit code of the dev server

        Raises:
            FileNotFoundError: if the banner does not exist
        """
        banner_name = banner_name or self.config.selected_banner
        if not banner_name:
            raise FileNotFoundError("Please specify a banner name")

        if banner_name not in self.available_banners():
            raise FileNotFoundError(f'Banner "{banner_name}" not found.')

        banner_dir = self.config.banner_root / banner_name
        self.logger.info(f"🚀 Starting development server for: {banner_name}")
        self.logger.info(f"📂 Banner directory: {banner_dir}/")

        env = dict(os.environ, BANNER=banner_name, NODE_ENV='development')
        process = subprocess.Popen(self.command, env=env, cwd=self.config.project_root)

        try:
            return_code = process.wait()
        except KeyboardInterrupt:
            self.logger.info("👋 Stopping development server...")
            process.send_signal(signal.SIGINT)
            return_code = process.wait()

        if return_code != 0:
            self.logger.error(f"❌ Development server exited with code {return_code}")
        return return_code


def exit_status(return_code: int) -> int:
    """Shell-style exit status: a child killed by signal N maps to 128 + N."""
    if return_code < 0:
        return 128 - return_code
    return return_code


def main(argv: Optional[Sequence[str]] = None):
    """Command-line entry point."""
    parser = argparse.ArgumentParser(description='Run the dev server for a single banner')
    parser.add_argument('command', nargs='?', default='list',
                        help="'list', 'start <banner>' or a banner name")
    parser.add_argument('banner', nargs='?', help='Banner name for the start command')
    add_common_arguments(parser)
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    helper = BannerDevHelper(config_from_args(args))

    if args.command == 'list':
        helper.list_banners()
        return

    banner_name = args.banner if args.command == 'start' else args.command

    try:
        return_code = helper.start_dev(banner_name)
    except OSError as e:
        print(f"❌ {e}")
        helper.list_banners()
        sys.exit(1)

    if return_code:
        sys.exit(exit_status(return_code))


if __name__ == '__main__':
    main()
