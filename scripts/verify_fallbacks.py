#!/usr/bin/env python3
"""
Fallback image verification script to check that every banner ships a static
fallback image with the same dimensions as the banner itself.
"""

import argparse
import logging
import sys
from typing import Dict, Optional, Sequence

from PIL import Image, UnidentifiedImageError

from banner_config import BannerConfig, add_common_arguments, config_from_args, setup_logging
from banner_sizes import extract_dimensions

TOLERANCE_PX = 5

logger = logging.getLogger(__name__)


def verify_fallbacks(config: Optional[BannerConfig] = None) -> Dict[str, int]:
    """
    Verify that fallback images have the correct dimensions.

    Returns:
        Summary counts: checked, correct, mismatched, missing, unreadable
    """
    config = config or BannerConfig()
    summary = {'checked': 0, 'correct': 0, 'mismatched': 0, 'missing': 0, 'unreadable': 0}

    if not config.banner_root.is_dir():
        logger.error(f"❌ Banner directory not found: {config.banner_root}")
        return summary

    for banner_dir in sorted(config.banner_root.iterdir()):
        if not banner_dir.is_dir() or config.is_private(banner_dir.name):
            continue

        name = banner_dir.name
        fallback_file = banner_dir / config.fallback_image
        if not fallback_file.exists():
            logger.warning(f"⚠️  {name}: No fallback image found")
            summary['missing'] += 1
            continue

        expected = extract_dimensions(name)
        try:
            with Image.open(fallback_file) as img:
                actual_width, actual_height = img.size
        except (OSError, UnidentifiedImageError) as e:
            logger.error(f"❌ {name}: Error reading fallback image - {e}")
            summary['unreadable'] += 1
            continue

        summary['checked'] += 1
        file_size = fallback_file.stat().st_size / 1024

        width_match = abs(actual_width - expected.width) <= TOLERANCE_PX
        height_match = abs(actual_height - expected.height) <= TOLERANCE_PX
        if width_match and height_match:
            logger.info(f"✅ {name}: {actual_width}x{actual_height} ({file_size:.1f} KB)")
            summary['correct'] += 1
        else:
            logger.warning(f"📏 {name}: {actual_width}x{actual_height} (Expected: {expected})")
            summary['mismatched'] += 1

    return summary


def main(argv: Optional[Sequence[str]] = None):
    parser = argparse.ArgumentParser(description='Check banner fallback images')
    add_common_arguments(parser)
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    summary = verify_fallbacks(config_from_args(args))

    print("\n" + "=" * 40)
    print("📊 Summary:")
    print(f"   Total checked: {summary['checked']}")
    print(f"   Correct dimensions: {summary['correct']}")
    print(f"   Wrong dimensions: {summary['mismatched']}")
    print(f"   Missing: {summary['missing']}")
    print(f"   Unreadable: {summary['unreadable']}")

    if summary['mismatched'] or summary['missing'] or summary['unreadable']:
        sys.exit(1)


if __name__ == '__main__':
    main()
