#!/usr/bin/env python3
"""
Asset Reference Scanner

Finds the stylesheets and images a compiled banner actually references, so the
deploy step can package only those files.

The build step writes shared assets two levels above each banner page
(_review/assets/css, _review/assets/img), so compiled markup refers to them as
'../../assets/css/...' and '../../assets/img/...'. Anything else (absolute
URLs, data URIs, inline assets) needs no repackaging and is ignored.
"""

import re
from dataclasses import dataclass, field
from typing import List

from bs4 import BeautifulSoup, Tag

CSS_PREFIX = '../../assets/css/'
IMG_PREFIX = '../../assets/img/'

CSS_PATH_PATTERN = re.compile(r'href=(["\']?)\.\./\.\./assets/css/')
IMG_PATH_PATTERN = re.compile(r'src=(["\']?)\.\./\.\./assets/img/')
CSS_URL_PATTERN = re.compile(r'url\s*\(\s*["\']?\.\./img/([^"\')\s?#]+)[^)]*\)')


@dataclass
class AssetManifest:
    stylesheets: List[str] = field(default_factory=list)
    images: List[str] = field(default_factory=list)


def extract_asset_references(html_content: str) -> AssetManifest:
    """
    Extract asset references from compiled banner markup.

    Args:
        html_content: HTML of a compiled banner page

    Returns:
        AssetManifest with paths relative to assets/css and assets/img, in
        document order (duplicates kept)
    """
    manifest = AssetManifest()
    soup = BeautifulSoup(html_content, 'html.parser')

    for element in soup.find_all(True):
        if not isinstance(element, Tag):
            continue

        href = element.get('href')
        if isinstance(href, str) and href.startswith(CSS_PREFIX):
            manifest.stylesheets.append(href[len(CSS_PREFIX):])

        src = element.get('src')
        if isinstance(src, str) and src.startswith(IMG_PREFIX):
            manifest.images.append(src[len(IMG_PREFIX):])

    return manifest


def extract_stylesheet_images(css_content: str) -> List[str]:
    """
    Extract images referenced from a compiled stylesheet via url(../img/...).

    These are not visible in the markup but still have to ship with the banner.
    """
    return [match.group(1) for match in CSS_URL_PATTERN.finditer(css_content)]


def update_asset_paths(html_content: str) -> str:
    """
    Rewrite asset paths for a flattened banner directory.

    '../../assets/css/' becomes 'assets/css/' and '../../assets/img/' becomes
    'assets/img/'. The rest of the markup is left byte-for-byte intact.
    """
    html_content = CSS_PATH_PATTERN.sub(lambda m: f'href={m.group(1)}assets/css/', html_content)
    html_content = IMG_PATH_PATTERN.sub(lambda m: f'src={m.group(1)}assets/img/', html_content)
    return html_content
