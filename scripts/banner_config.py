#!/usr/bin/env python3
"""
Banner Toolkit Configuration

Shared settings for the banner scripts: where the source banners live, where
the compiled review tree and the deploy output go, and how large a deployable
archive may get before it is flagged.

Every script builds a BannerConfig from its command-line options and hands it
to the class doing the work, so nothing depends on hidden module globals.
"""

import json
import logging
import os
import re
import sys
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional

DEFAULT_SIZE_CEILING_KB = 500  # IAB limit is 200KB, 500KB leaves a buffer


@dataclass
class BannerConfig:
    """Directory layout and limits for one banner project."""

    project_root: Path = field(default_factory=Path.cwd)
    banner_root: Path = Path('banners')
    review_root: Path = Path('_review')
    deploy_root: Path = Path('_deploy')
    size_ceiling_bytes: int = DEFAULT_SIZE_CEILING_KB * 1024
    reference_banner: str = '300x250-1'
    private_prefix: str = '_'
    fallback_image: str = 'fallback.jpg'
    selected_banner: Optional[str] = None
    mode: str = 'production'

    def __post_init__(self):
        self.project_root = Path(self.project_root).resolve()
        self.banner_root = self._resolve(self.banner_root)
        self.review_root = self._resolve(self.review_root)
        self.deploy_root = self._resolve(self.deploy_root)

    def _resolve(self, path) -> Path:
        path = Path(path)
        if path.is_absolute():
            return path
        return self.project_root / path

    @classmethod
    def from_env(cls, **overrides) -> 'BannerConfig':
        """
        Build a config honouring the BANNER and NODE_ENV variables used by the
        external build step.
        """
        config = cls(**overrides)
        return replace(
            config,
            selected_banner=os.environ.get('BANNER') or config.selected_banner,
            mode=os.environ.get('NODE_ENV') or config.mode,
        )

    @property
    def reference_dir(self) -> Path:
        return self.banner_root / self.reference_banner

    def is_private(self, name: str) -> bool:
        """Template and scratch directories are prefixed and never published."""
        return name.startswith(self.private_prefix) or name.startswith('.')


@dataclass
class ProjectInfo:
    name: str
    title: str = 'Banner Review'
    year: str = ''
    client_code: str = ''
    job_code: str = ''

    @property
    def archive_name(self) -> str:
        """Name of the aggregate deploy archive, e.g. '25-tac-027' -> 'TAC-027'."""
        return re.sub(r'^(\d+-)', '', self.name.upper())


def load_project_info(project_root: Path) -> ProjectInfo:
    """
    Read project metadata from the banner project's package.json.

    The package name follows the '<year>-<client>-<job>' convention. Without a
    package.json the project is simply called 'banners'.
    """
    package_json = Path(project_root) / 'package.json'
    if not package_json.exists():
        return ProjectInfo(name='banners')

    with open(package_json, 'r', encoding='utf-8') as f:
        data = json.load(f)

    name = data.get('name') or 'banners'
    parts = name.split('-')
    return ProjectInfo(
        name=name,
        title=data.get('title') or 'Banner Review',
        year=parts[0] if parts else '',
        client_code=(parts[1] if len(parts) > 1 else '').upper(),
        job_code=parts[2] if len(parts) > 2 else '',
    )


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)]
    )


def add_common_arguments(parser) -> None:
    """Options shared by every banner script."""
    parser.add_argument('--project-root', type=Path, default=Path.cwd(),
                        help='Banner project directory (default: current directory)')
    parser.add_argument('--banners-dir', type=Path, default=Path('banners'),
                        help='Directory containing the source banners')
    parser.add_argument('--review-dir', type=Path, default=Path('_review'),
                        help='Compiled review output directory')
    parser.add_argument('--verbose', action='store_true',
                        help='Enable debug logging')


def config_from_args(args, **overrides) -> BannerConfig:
    """Translate parsed command-line options into a BannerConfig."""
    options = {
        'project_root': args.project_root,
        'banner_root': args.banners_dir,
        'review_root': args.review_dir,
    }
    options.update(overrides)
    return BannerConfig.from_env(**options)
