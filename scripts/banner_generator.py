#!/usr/bin/env python3
"""
Banner Generator

Creates new banner sizes from a reference banner. The reference directory is
cloned as a whole, then the width/height placeholders of its markup and main
stylesheet are rewritten for the new size. Scripts are copied untouched.

Features:
- Validates the reference banner once per batch, before anything is copied
- Never overwrites an existing banner directory
- Isolates failures: one broken size does not stop the rest of the batch
- Lists and removes generated banners

Usage:
    python banner_generator.py generate 300x250 728x90
    python banner_generator.py standard
    python banner_generator.py list
    python banner_generator.py cleanup 728x90
"""

import argparse
import logging
import shutil
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from banner_config import BannerConfig, add_common_arguments, config_from_args, setup_logging
from banner_sizes import STANDARD_SIZES, Size, extract_dimensions, parse_size
from template_processor import TEMPLATE_FILES, update_template_variables

REQUIRED_FILES = (
    'index.html',
    'assets/css/source.css',
    'assets/js/script.js',
)


@dataclass
class BannerVariant:
    name: str
    size: Size
    directory: Path


@dataclass
class ReferenceBanner:
    """The canonical banner new sizes are derived from."""

    directory: Path
    required_files: Tuple[str, ...] = field(default=REQUIRED_FILES)

    def validate(self) -> None:
        """
        Check the reference directory and its required files.

        Raises:
            FileNotFoundError: naming the directory or the first missing file
        """
        if not self.directory.is_dir():
            raise FileNotFoundError(f"Reference banner not found: {self.directory}")

        for relative in self.required_files:
            if not (self.directory / relative).is_file():
                raise FileNotFoundError(f"Required file missing in reference banner: {relative}")


def copy_directory(src: Path, dest: Path) -> None:
    """Copy a directory tree, merging into ``dest`` if it already exists."""
    shutil.copytree(src, dest, dirs_exist_ok=True)


class BannerGenerator:
    """
    Generates banner variants from the reference banner.
    """

    def __init__(self, config: Optional[BannerConfig] = None):
        self.config = config or BannerConfig()
        self.reference = ReferenceBanner(self.config.reference_dir)
        self.logger = logging.getLogger(__name__)
        # Names of variants that failed during the last batch
        self.failures: List[str] = []

    @property
    def banners_dir(self) -> Path:
        return self.config.banner_root

    def validate_reference(self) -> None:
        self.reference.validate()
        self.logger.info(f"✅ Reference banner validated: {self.config.reference_banner}")

    def banner_name(self, size: Size, variant: int = 1) -> str:
        return f"{size.width}x{size.height}-{variant}"

    def _copy_fallback_image(self, banner_dir: Path) -> None:
        reference_fallback = self.reference.directory / self.config.fallback_image
        if not reference_fallback.exists():
            self.logger.warning("⚠️  No fallback image found in reference banner")
            return

        shutil.copy2(reference_fallback, banner_dir / self.config.fallback_image)
        self.logger.info("📷 Copied fallback image")

    def generate(self, size_spec: str, variant: int = 1) -> Optional[BannerVariant]:
        """
        Generate a single banner size.

        Args:
            size_spec: Size string like '300x250'
            variant: Variant number appended to the directory name

        Returns:
            The created variant, or None if it already existed

        Raises:
            ValueError: if size_spec is not a valid size
        """
        size = parse_size(size_spec)
        name = self.banner_name(size, variant)
        banner_dir = self.banners_dir / name

        self.logger.info(f"🎨 Generating banner: {name} ({size})")

        if banner_dir.exists():
            self.logger.warning(f"⚠️  Banner {name} already exists, skipping...")
            return None

        self.logger.info(f"📁 Copying files from {self.config.reference_banner}...")
        copy_directory(self.reference.directory, banner_dir)

        for relative in TEMPLATE_FILES:
            file_path = banner_dir / relative
            if file_path.exists():
                update_template_variables(file_path, size)
                self.logger.info(f"✏️  Updated {relative}")

        self._copy_fallback_image(banner_dir)

        self.logger.info(f"✅ Banner {name} created successfully!")
        return BannerVariant(name=name, size=size, directory=banner_dir)

    def generate_multiple(self, size_specs: Sequence[str]) -> List[BannerVariant]:
        """
        Generate several banner sizes.

        Every size is parsed and the reference validated before the first
        directory is created. After that, a failing size is logged and the
        remaining sizes are still generated.

        Returns:
            The variants that were created
        """
        for size_spec in size_specs:
            parse_size(size_spec)

        self.logger.info(
            f"🚀 Generating {len(size_specs)} banner sizes from reference: {self.config.reference_banner}"
        )
        self.validate_reference()

        created = []
        self.failures = []
        for size_spec in size_specs:
            try:
                variant = self.generate(size_spec)
            except (OSError, UnicodeError) as e:
                self.logger.error(f"❌ Failed to generate {size_spec}: {e}")
                self.failures.append(size_spec)
                continue
            if variant:
                created.append(variant)

        if self.failures:
            self.logger.warning(f"⚠️  {len(self.failures)} banner(s) failed: {', '.join(self.failures)}")
        else:
            self.logger.info("🎉 All banners generated successfully!")
        return created

    def list_banners(self) -> List[Tuple[str, Size]]:
        """List existing, non-private banners with their dimensions."""
        if not self.banners_dir.is_dir():
            return []

        names = sorted(
            entry.name for entry in self.banners_dir.iterdir()
            if entry.is_dir() and not self.config.is_private(entry.name)
        )
        return [(name, extract_dimensions(name)) for name in names]

    def cleanup(self, size_specs: Iterable[str]) -> List[str]:
        """
        Remove the first variant of each given size.

        Missing directories are ignored.

        Returns:
            Names of the directories that were removed
        """
        sizes = [parse_size(size_spec) for size_spec in size_specs]
        self.logger.info("🧹 Cleaning up generated banners...")

        removed = []
        for size in sizes:
            name = self.banner_name(size)
            banner_dir = self.banners_dir / name
            if banner_dir.exists():
                shutil.rmtree(banner_dir)
                removed.append(name)
                self.logger.info(f"🗑️  Removed {name}")
        return removed


def print_help():
    print("🎨 Banner Generator")
    print("\nCommands:")
    print("  generate <sizes...>  Generate specific banner sizes")
    print("  standard             Generate all standard IAB sizes")
    print("  list                 List existing banners")
    print("  cleanup <sizes...>   Remove specific banner sizes")
    print("  help                 Show this help")
    print("\nExamples:")
    print("  python banner_generator.py generate 300x250 728x90")
    print("  python banner_generator.py standard")
    print("  python banner_generator.py list")
    print("\nStandard IAB Sizes:")
    for size_name, label in STANDARD_SIZES.items():
        print(f"  • {size_name} ({label})")


def main(argv: Optional[Sequence[str]] = None):
    """Command-line entry point."""
    parser = argparse.ArgumentParser(description='Generate banner sizes from a reference banner')
    parser.add_argument('command', nargs='?', default='help',
                        choices=['generate', 'standard', 'list', 'cleanup', 'help'])
    parser.add_argument('sizes', nargs='*', help='Banner sizes, e.g. 300x250 728x90')
    parser.add_argument('--reference', default='300x250-1',
                        help='Reference banner directory name (default: 300x250-1)')
    add_common_arguments(parser)
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    generator = BannerGenerator(config_from_args(args, reference_banner=args.reference))

    try:
        if args.command == 'generate':
            if not args.sizes:
                print("❌ Please specify banner sizes to generate")
                print("Usage: python banner_generator.py generate 300x250 728x90 ...")
                sys.exit(1)
            generator.generate_multiple(args.sizes)
            if generator.failures:
                sys.exit(1)

            print("\n💡 Next steps:")
            print("   1. Run: python dev_banner.py list")
            print("   2. Develop: python dev_banner.py <banner-name>")
            print("   3. Review: python review_generator.py")

        elif args.command == 'standard':
            generator.generate_multiple(list(STANDARD_SIZES))
            if generator.failures:
                sys.exit(1)

        elif args.command == 'list':
            print("📦 Existing banners:")
            for name, size in generator.list_banners():
                print(f"  • {name} ({size.width}x{size.height})")

        elif args.command == 'cleanup':
            if not args.sizes:
                print("❌ Please specify banner sizes to cleanup")
                print("Usage: python banner_generator.py cleanup 300x250 728x90 ...")
                sys.exit(1)
            generator.cleanup(args.sizes)

        else:
            print_help()

    except (ValueError, OSError) as e:
        print(f"❌ Error: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
