#!/usr/bin/env python3
"""
Banner Deployer

Packages compiled banners into zip files for distribution.

For every banner in the compiled review tree:
- a clean staging directory is built with only the assets the page references
- asset paths are rewritten so the banner works as a flat, self-contained folder
- the staging directory is zipped (all banners in parallel) and the zip size
  is checked against the size ceiling

Once every banner zip exists, an aggregate zip containing all of them is
created and the staging directories are removed.

Usage:
    python banner_deploy.py            # package all banners
    python banner_deploy.py clean      # remove the deploy directory

Requirements:
    - aiofiles
    - beautifulsoup4
"""

import argparse
import asyncio
import io
import logging
import shutil
import sys
import zipfile
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import List, Optional, Sequence

import aiofiles

from asset_scanner import extract_asset_references, extract_stylesheet_images, update_asset_paths
from banner_config import (
    DEFAULT_SIZE_CEILING_KB,
    BannerConfig,
    ProjectInfo,
    add_common_arguments,
    config_from_args,
    load_project_info,
    setup_logging,
)


@dataclass
class DeployArchive:
    banner_name: str
    path: Path
    byte_size: int
    over_budget: bool = False

    @property
    def size_kb(self) -> float:
        return self.byte_size / 1024


def _is_safe_relative(relative: str) -> bool:
    path = PurePosixPath(relative)
    return bool(relative) and not path.is_absolute() and '..' not in path.parts


class BannerDeployer:
    """
    Builds per-banner and aggregate deploy archives from the review tree.
    """

    def __init__(self, config: Optional[BannerConfig] = None,
                 project_info: Optional[ProjectInfo] = None, max_workers: int = 4):
        self.config = config or BannerConfig()
        self.project_info = project_info or load_project_info(self.config.project_root)
        self.max_workers = max_workers
        self.logger = logging.getLogger(__name__)

    @property
    def deploy_dir(self) -> Path:
        return self.config.deploy_root

    @property
    def review_dir(self) -> Path:
        return self.config.review_root

    @property
    def review_banners_dir(self) -> Path:
        return self.review_dir / 'banners'

    @property
    def review_assets_dir(self) -> Path:
        return self.review_dir / 'assets'

    def ensure_deploy_dir(self) -> None:
        self.deploy_dir.mkdir(parents=True, exist_ok=True)

    def discover_banners(self) -> List[str]:
        """Names of the compiled, non-private banners in the review tree."""
        if not self.review_banners_dir.is_dir():
            return []
        return sorted(
            entry.name for entry in self.review_banners_dir.iterdir()
            if entry.is_dir()
            and not self.config.is_private(entry.name)
            and (entry / 'index.html').exists()
        )

    def _copy_assets(self, files: Sequence[str], source_dir: Path, dest_dir: Path) -> List[Path]:
        """
        Copy referenced asset files, skipping references to files that no
        longer exist.
        """
        copied = []
        if not files:
            return copied

        dest_dir.mkdir(parents=True, exist_ok=True)
        for relative in files:
            if not _is_safe_relative(relative):
                self.logger.warning(f"⚠️  Ignoring asset reference outside the asset root: {relative}")
                continue

            source_file = source_dir / relative
            if not source_file.is_file():
                self.logger.debug(f"Referenced asset not found, skipping: {source_file}")
                continue

            dest_file = dest_dir / relative
            dest_file.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(source_file, dest_file)
            copied.append(dest_file)
        return copied

    def prepare_banner(self, banner_name: str) -> Path:
        """
        Build the staging directory for a single banner.

        Args:
            banner_name: Name of the banner (e.g. '970x250')

        Returns:
            Path to the staging directory
        """
        review_banner_dir = self.review_banners_dir / banner_name
        deploy_banner_dir = self.deploy_dir / banner_name

        if deploy_banner_dir.exists():
            shutil.rmtree(deploy_banner_dir)
        deploy_banner_dir.mkdir(parents=True)

        with open(review_banner_dir / 'index.html', 'r', encoding='utf-8') as f:
            html_content = f.read()
        assets = extract_asset_references(html_content)

        with open(deploy_banner_dir / 'index.html', 'w', encoding='utf-8') as f:
            f.write(update_asset_paths(html_content))

        # The build step does not process the fallback image, so it comes from
        # the source banner rather than the review tree
        fallback_path = self.config.banner_root / banner_name / self.config.fallback_image
        if fallback_path.exists():
            shutil.copy2(fallback_path, deploy_banner_dir / self.config.fallback_image)
        else:
            self.logger.debug(f"No fallback image for {banner_name}")

        assets_dir = deploy_banner_dir / 'assets'
        assets_dir.mkdir(parents=True, exist_ok=True)

        copied_css = self._copy_assets(assets.stylesheets, self.review_assets_dir / 'css', assets_dir / 'css')

        images = list(assets.images)
        for css_file in copied_css:
            with open(css_file, 'r', encoding='utf-8', errors='replace') as f:
                images.extend(extract_stylesheet_images(f.read()))
        self._copy_assets(images, self.review_assets_dir / 'img', assets_dir / 'img')

        # Scripts loaded without module bundling are passed through as-is
        review_js_dir = review_banner_dir / 'assets' / 'js'
        if review_js_dir.is_dir():
            shutil.copytree(review_js_dir, assets_dir / 'js', dirs_exist_ok=True)

        self.logger.info(f"✅ Prepared {banner_name} for deployment")
        return deploy_banner_dir

    @staticmethod
    def _zip_directory(source_dir: Path) -> bytes:
        """Deflate a directory tree into zip bytes, entries relative to it."""
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, 'w', zipfile.ZIP_DEFLATED, compresslevel=9) as zf:
            for path in sorted(source_dir.rglob('*')):
                if path.is_file():
                    zf.write(path, path.relative_to(source_dir).as_posix())
        return buffer.getvalue()

    @staticmethod
    def _zip_files(files: Sequence[Path]) -> bytes:
        """Store already-compressed archives side by side in a zip."""
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, 'w', zipfile.ZIP_STORED) as zf:
            for path in files:
                zf.write(path, path.name)
        return buffer.getvalue()

    async def create_banner_zip(self, banner_name: str, executor: ThreadPoolExecutor) -> DeployArchive:
        """
        Create the zip file for a prepared banner.

        Compression runs in a worker thread; the zip is written with aiofiles.
        An oversized zip is kept and only reported.
        """
        banner_dir = self.deploy_dir / banner_name
        zip_path = self.deploy_dir / f"{banner_name}.zip"

        loop = asyncio.get_running_loop()
        content = await loop.run_in_executor(executor, self._zip_directory, banner_dir)

        async with aiofiles.open(zip_path, 'wb') as f:
            await f.write(content)

        archive = DeployArchive(banner_name=banner_name, path=zip_path, byte_size=len(content))
        self.logger.info(f"📦 Created {zip_path.name} ({archive.size_kb:.1f}KB)")

        if archive.byte_size > self.config.size_ceiling_bytes:
            archive.over_budget = True
            self.logger.warning(
                f"⚠️  {zip_path.name} exceeds size limit ({self.config.size_ceiling_bytes / 1024:.0f}KB)"
            )
        return archive

    async def create_master_zip(self, archives: Sequence[DeployArchive],
                                executor: ThreadPoolExecutor) -> Path:
        """Create the aggregate zip containing every banner zip."""
        zip_path = self.deploy_dir / f"{self.project_info.archive_name}.zip"
        files = [archive.path for archive in archives if archive.path.exists()]

        loop = asyncio.get_running_loop()
        content = await loop.run_in_executor(executor, self._zip_files, files)

        async with aiofiles.open(zip_path, 'wb') as f:
            await f.write(content)

        self.logger.info(f"📦 Created master {zip_path.name} ({len(content) / 1024:.1f}KB)")
        return zip_path

    async def _package(self, banner_names: Sequence[str]) -> List[DeployArchive]:
        with ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix='banner-zip') as executor:
            results = await asyncio.gather(
                *(self.create_banner_zip(name, executor) for name in banner_names),
                return_exceptions=True,
            )

            archives = []
            failures = []
            for name, result in zip(banner_names, results):
                if isinstance(result, BaseException):
                    self.logger.error(f"❌ Failed to create {name}.zip: {result}")
                    failures.append(name)
                else:
                    archives.append(result)

            if failures:
                raise RuntimeError(
                    f"Could not create zip files for: {', '.join(failures)}. "
                    f"Master zip not created; staging directories kept in {self.deploy_dir}"
                )

            await self.create_master_zip(archives, executor)
        return archives

    def _run(self, coro):
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        try:
            return loop.run_until_complete(coro)
        finally:
            loop.close()
            asyncio.set_event_loop(None)

    def deploy(self) -> List[DeployArchive]:
        """
        Deploy all banners.

        Raises:
            FileNotFoundError: if the review tree has not been built
            RuntimeError: if any banner zip could not be written
        """
        if not self.review_dir.exists():
            raise FileNotFoundError(
                f"Review directory not found ({self.review_dir}). Please run the build step first."
            )

        self.ensure_deploy_dir()
        banner_names = self.discover_banners()

        if not banner_names:
            self.logger.warning(f"⚠️  No banners found in {self.review_banners_dir}")
            return []

        self.logger.info(f"🚀 Deploying {len(banner_names)} banners...")
        for banner_name in banner_names:
            self.prepare_banner(banner_name)

        self.logger.info("📦 Creating zip files...")
        archives = self._run(self._package(banner_names))

        self.logger.info("🧹 Cleaning up temporary files...")
        for banner_name in banner_names:
            banner_dir = self.deploy_dir / banner_name
            if banner_dir.exists():
                shutil.rmtree(banner_dir, ignore_errors=True)

        oversized = [archive for archive in archives if archive.over_budget]
        if oversized:
            self.logger.warning(f"⚠️  {len(oversized)} banner(s) over the size limit")
        self.logger.info(f"✅ Deployment complete! Files saved to {self.deploy_dir}/")
        return archives

    def clean(self) -> None:
        """Remove the deploy directory."""
        if self.deploy_dir.exists():
            shutil.rmtree(self.deploy_dir)
            self.logger.info(f"Cleaned {self.deploy_dir} directory")


def main(argv: Optional[Sequence[str]] = None):
    """Command-line entry point."""
    parser = argparse.ArgumentParser(description='Package compiled banners into deployable zip files')
    parser.add_argument('command', nargs='?', default='deploy', choices=['deploy', 'clean'],
                        help='deploy (default) or clean')
    parser.add_argument('--deploy-dir', type=Path, default=Path('_deploy'),
                        help='Output directory for zip files')
    parser.add_argument('--max-size-kb', type=int, default=DEFAULT_SIZE_CEILING_KB,
                        help=f'Warn when a banner zip exceeds this size (default: {DEFAULT_SIZE_CEILING_KB})')
    add_common_arguments(parser)
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    config = config_from_args(
        args,
        deploy_root=args.deploy_dir,
        size_ceiling_bytes=args.max_size_kb * 1024,
    )
    deployer = BannerDeployer(config)

    try:
        if args.command == 'clean':
            deployer.clean()
        else:
            deployer.deploy()
    except Exception as e:
        print(f"❌ Deploy failed: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
