#!/usr/bin/env python3
"""
Banner Template Processor

Rewrites width/height placeholders in banner markup and stylesheets.

Two passes are applied to a file:
- named placeholders ({{width}}, {{height}}) in any text asset
- known literal patterns in markup (unquoted width=/height= values such as
  the ad.size meta content, the 'Ad Banner: WxH' title label) and
  stylesheets ($width/$height and --width/--height declarations)

The literal patterns are a fixed vocabulary shared with the reference banner
template. They are matched with regular expressions rather than a markup or
CSS parser, so markup outside that vocabulary is left untouched. Quoted
attributes such as <img width="120"> keep their value; per-size attributes
use the {{width}}/{{height}} placeholders instead.

Usage:
    python template_processor.py [--banners-dir banners]
"""

import argparse
import logging
import re
import sys
from pathlib import Path
from typing import List, Optional

from banner_config import BannerConfig, add_common_arguments, config_from_args, setup_logging
from banner_sizes import Size, extract_dimensions

PLACEHOLDER_PATTERNS = {
    'width': re.compile(r'\{\{\s*width\s*\}\}'),
    'height': re.compile(r'\{\{\s*height\s*\}\}'),
}

HTML_ATTRIBUTE_PATTERN = re.compile(r'(?<![\w-])(width|height)=\d+')
HTML_LABEL_PATTERN = re.compile(r'Ad Banner: \d+x\d+')
CSS_VARIABLE_PATTERN = re.compile(r'(\$|--)(width|height)(\s*:\s*)\d+px;')

HTML_SUFFIXES = {'.html', '.htm'}
CSS_SUFFIXES = {'.css', '.scss'}

# Files rewritten when a banner is generated or processed
TEMPLATE_FILES = ['index.html', 'assets/css/source.css']


def asset_kind(path: Path) -> Optional[str]:
    """Return 'html' or 'css' for the asset types with a literal pass."""
    suffix = path.suffix.lower()
    if suffix in HTML_SUFFIXES:
        return 'html'
    if suffix in CSS_SUFFIXES:
        return 'css'
    return None


def replace_placeholders(content: str, size: Size) -> str:
    """Replace {{width}} and {{height}} tokens."""
    content = PLACEHOLDER_PATTERNS['width'].sub(str(size.width), content)
    return PLACEHOLDER_PATTERNS['height'].sub(str(size.height), content)


def substitute(content: str, size: Size, kind: Optional[str] = None) -> str:
    """
    Apply every substitution pass for the given asset kind.

    Args:
        content: Text of the asset
        size: Target dimensions
        kind: 'html', 'css' or None for placeholders only

    Returns:
        The rewritten text
    """
    content = replace_placeholders(content, size)

    values = {'width': size.width, 'height': size.height}

    if kind == 'html':
        content = HTML_ATTRIBUTE_PATTERN.sub(
            lambda m: f"{m.group(1)}={values[m.group(1)]}",
            content,
        )
        content = HTML_LABEL_PATTERN.sub(f"Ad Banner: {size.width}x{size.height}", content)
    elif kind == 'css':
        content = CSS_VARIABLE_PATTERN.sub(
            lambda m: f"{m.group(1)}{m.group(2)}{m.group(3)}{values[m.group(2)]}px;",
            content,
        )

    return content


def update_template_variables(file_path: Path, size: Size, placeholders_only: bool = False) -> bool:
    """
    Rewrite a template file in place.

    Read and write errors propagate to the caller.

    Returns:
        True if the file content changed
    """
    kind = None if placeholders_only else asset_kind(file_path)

    with open(file_path, 'r', encoding='utf-8') as f:
        content = f.read()

    updated = substitute(content, size, kind)
    if updated == content:
        return False

    with open(file_path, 'w', encoding='utf-8') as f:
        f.write(updated)
    return True


class TemplateProcessor:
    """
    Fills in the {{width}}/{{height}} placeholders of every banner, taking the
    dimensions from each banner's directory name.
    """

    def __init__(self, config: Optional[BannerConfig] = None):
        self.config = config or BannerConfig()
        self.logger = logging.getLogger(__name__)

    def banner_dirs(self) -> List[Path]:
        if not self.config.banner_root.is_dir():
            return []
        return sorted(
            index.parent for index in self.config.banner_root.glob('*/index.html')
            if not self.config.is_private(index.parent.name)
        )

    def process_banners(self) -> int:
        """
        Process all banner templates.

        Returns:
            Number of files rewritten
        """
        updated = 0
        for banner_dir in self.banner_dirs():
            size = extract_dimensions(banner_dir.name)
            self.logger.info(f"Processing banner: {banner_dir.name} ({size})")

            for relative in TEMPLATE_FILES:
                path = banner_dir / relative
                if path.exists() and update_template_variables(path, size, placeholders_only=True):
                    updated += 1
                    self.logger.debug(f"✏️  Updated {relative}")

        self.logger.info(f"✅ Template processing complete ({updated} files updated)")
        return updated


def main():
    """Command-line entry point."""
    parser = argparse.ArgumentParser(description='Fill width/height placeholders in banner templates')
    add_common_arguments(parser)
    args = parser.parse_args()

    setup_logging(args.verbose)

    try:
        TemplateProcessor(config_from_args(args)).process_banners()
    except Exception as e:
        print(f"❌ Template processing failed: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
