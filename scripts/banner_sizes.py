#!/usr/bin/env python3
"""
Banner Sizes

Parsing of 'WIDTHxHEIGHT' tokens and the catalog of standard IAB sizes.
Run directly to print the catalog and the sizes already present in a
banner directory.

Usage:
    python banner_sizes.py [banners_dir]
"""

import argparse
import re
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# Standard sizes always have at least two digits per side
SIZE_PATTERN = re.compile(r'(\d{2,})x(\d{2,})')
SIZE_SPEC_PATTERN = re.compile(r'\s*(\d+)x(\d+)\s*')


@dataclass(frozen=True)
class Size:
    width: int
    height: int

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Banner dimensions must be positive: {self.width}x{self.height}")

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


DEFAULT_SIZE = Size(300, 250)

# Standard IAB banner sizes
STANDARD_SIZES = {
    '300x250': 'Medium Rectangle',
    '320x480': 'Mobile Interstitial',
    '320x50': 'Mobile Banner',
    '300x50': 'Mobile Banner Small',
    '160x600': 'Wide Skyscraper',
    '300x600': 'Half Page Ad',
    '728x90': 'Leaderboard',
    '970x90': 'Super Leaderboard',
    '970x250': 'Billboard',
    '336x250': 'Large Rectangle',
}


def extract_dimensions(name: str, default: Optional[Size] = DEFAULT_SIZE) -> Optional[Size]:
    """
    Extract banner dimensions from a directory name like '300x250-1'.

    Legacy and irregularly named directories fall back to ``default``.
    """
    match = SIZE_PATTERN.search(name)
    if match:
        width, height = int(match.group(1)), int(match.group(2))
        if width and height:
            return Size(width, height)
    return default


def parse_size(size_spec: str) -> Size:
    """
    Parse a size given on the command line, e.g. '728x90'.

    Unlike extract_dimensions there is no fallback: a new banner must never be
    created with a made-up size.

    Raises:
        ValueError: if the string is not a WIDTHxHEIGHT token
    """
    match = SIZE_SPEC_PATTERN.fullmatch(size_spec or '')
    if not match:
        raise ValueError(f"Invalid banner size '{size_spec}' (expected WIDTHxHEIGHT, e.g. 300x250)")
    return Size(int(match.group(1)), int(match.group(2)))


def list_banner_sizes(banners_dir: Path, private_prefix: str = '_') -> Counter:
    """
    Count the sizes of the banners present in a banner directory.

    Args:
        banners_dir: Directory containing one subdirectory per banner
        private_prefix: Prefix marking template directories to skip

    Returns:
        Counter mapping 'WIDTHxHEIGHT' to the number of banners
    """
    sizes = Counter()
    if not banners_dir.is_dir():
        return sizes

    for item in banners_dir.iterdir():
        if item.is_dir() and not item.name.startswith((private_prefix, '.')):
            sizes[str(extract_dimensions(item.name))] += 1
    return sizes


def print_standard_sizes():
    """Print the standard size catalog."""
    print("📐 Standard IAB Sizes")
    for size_name, label in STANDARD_SIZES.items():
        size = parse_size(size_name)
        print(f"  • {size_name:<8} {label} ({size.width}x{size.height})")


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description='List standard and existing banner sizes')
    parser.add_argument('banners_dir', nargs='?', default='banners',
                        help='Directory containing banner subdirectories')
    args = parser.parse_args()

    print_standard_sizes()

    banners_dir = Path(args.banners_dir)
    size_counts = list_banner_sizes(banners_dir)
    total = sum(size_counts.values())

    print()
    if not total:
        print(f"📭 No banners found in '{banners_dir}'")
        return

    print(f"📦 Existing banners in '{banners_dir}': {total}")
    for size, count in sorted(size_counts.items()):
        percentage = (count / total) * 100
        standard = '' if size in STANDARD_SIZES else '  (non-standard)'
        print(f"  {size:<15} : {count:>3} banners ({percentage:5.1f}%){standard}")


if __name__ == '__main__':
    main()
