#!/usr/bin/env python3
"""
Banner Review Page Generator

Builds a single static HTML page for reviewing every banner of the project:
a menu of all banners, a preview frame sized exactly like the selected banner,
left/right arrow keys to step through them, and a replay button.

The banner list (name, dimensions, on-disk size) is embedded in the page as
JSON. The generator only reads banner directories; it never modifies them.

Usage:
    python review_generator.py [--banners-dir banners] [--review-dir _review]
"""

import argparse
import logging
import math
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from jinja2 import Environment

from banner_config import BannerConfig, ProjectInfo, add_common_arguments, config_from_args, load_project_info, setup_logging
from banner_sizes import Size, extract_dimensions

REVIEW_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{{ project.title }} - Banner Review</title>
    <style>
        * { box-sizing: border-box; }
        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            margin: 0;
            padding: 0;
            background: #f5f5f5;
        }
        .header {
            position: sticky;
            top: 0;
            z-index: 100;
            background: white;
            box-shadow: 0 2px 4px rgba(0,0,0,0.1);
        }
        .header-content {
            display: flex;
            align-items: center;
            justify-content: space-between;
            padding: 15px 20px;
        }
        .header-info h1 { margin: 0 0 5px 0; color: #333; font-size: 24px; }
        .header-info p { margin: 0; color: #666; font-size: 14px; }
        .hamburger {
            background: #007bff;
            border: none;
            padding: 12px 16px;
            border-radius: 4px;
            cursor: pointer;
            display: flex;
            flex-direction: column;
            gap: 4px;
        }
        .hamburger span { display: block; width: 24px; height: 3px; background: white; border-radius: 2px; }
        .dropdown-menu {
            display: none;
            position: absolute;
            right: 20px;
            background: white;
            box-shadow: 0 4px 12px rgba(0,0,0,0.15);
            border-radius: 4px;
            max-height: 70vh;
            overflow-y: auto;
        }
        .dropdown-menu.active { display: block; }
        .dropdown-item {
            display: block;
            padding: 10px 20px;
            color: #333;
            text-decoration: none;
            white-space: nowrap;
        }
        .dropdown-item:hover { background: #f0f0f0; }
        .dropdown-item.active { background: #007bff; color: white; }
        .banner-viewer { padding: 30px 20px; text-align: center; }
        .banner-info h2 { margin: 0 0 5px 0; color: #333; }
        .banner-info p { margin: 0 0 5px 0; color: #666; }
        .banner-size { font-size: 13px; }
        .banner-frame-container { display: flex; justify-content: center; margin: 20px 0; }
        .banner-frame { background: white; box-shadow: 0 2px 8px rgba(0,0,0,0.15); }
        .banner-frame iframe { border: none; display: block; }
        .banner-actions { display: flex; gap: 10px; justify-content: center; }
        .btn {
            background: #007bff;
            color: white;
            border: none;
            padding: 10px 20px;
            border-radius: 4px;
            cursor: pointer;
            font-size: 14px;
            text-decoration: none;
        }
        .btn-secondary { background: #6c757d; }
        .empty { padding: 60px 20px; text-align: center; color: #666; }
    </style>
</head>
<body>
    <div class="header">
        <div class="header-content">
            <div class="header-info">
                <h1>{{ project.title }}</h1>
                <p>{% if project.client_code %}{{ project.client_code }} {{ project.job_code }} &middot; {% endif %}{{ banners|length }} banners</p>
            </div>
            <button class="hamburger" id="hamburger" aria-label="Banners">
                <span></span><span></span><span></span>
            </button>
        </div>
        <div class="dropdown-menu" id="dropdown">
            {% for banner in banners %}
            <a class="dropdown-item{% if loop.first %} active{% endif %}" href="#" data-banner="{{ loop.index0 }}">
                {{ banner.name }} ({{ banner.width }}&times;{{ banner.height }})
            </a>
            {% endfor %}
        </div>
    </div>

    {% if banners %}
    {% set first = banners[0] %}
    <div class="banner-viewer">
        <div class="banner-info" id="banner-info">
            <h2>{{ first.name }}</h2>
            <p>{{ first.width }} &times; {{ first.height }} pixels</p>
            <p class="banner-size">Bundle size: {{ first.sizeFormatted }}</p>
        </div>
        <div class="banner-frame-container">
            <div class="banner-frame" id="banner-frame" style="width: {{ first.width }}px; height: {{ first.height }}px;">
                <iframe id="banner-iframe" src="{{ first.path }}/index.html"
                        width="{{ first.width }}" height="{{ first.height }}"
                        title="{{ first.name }} Preview"></iframe>
            </div>
        </div>
        <div class="banner-actions">
            <button onclick="replayBanner()" class="btn">Replay</button>
            <a href="{{ first.path }}/index.html" target="_blank" class="btn" id="view-full-btn">View Full</a>
            <a href="{{ first.path }}" target="_blank" class="btn btn-secondary" id="view-files-btn">View Files</a>
        </div>
    </div>
    {% else %}
    <div class="empty">No banners found.</div>
    {% endif %}

    <script>
        const banners = {{ banners|tojson }};
        let currentBanner = 0;

        const hamburger = document.getElementById('hamburger');
        const dropdown = document.getElementById('dropdown');

        hamburger.addEventListener('click', (e) => {
            e.stopPropagation();
            hamburger.classList.toggle('active');
            dropdown.classList.toggle('active');
        });

        document.addEventListener('click', (e) => {
            if (!dropdown.contains(e.target)) {
                hamburger.classList.remove('active');
                dropdown.classList.remove('active');
            }
        });

        document.querySelectorAll('.dropdown-item').forEach((item) => {
            item.addEventListener('click', (e) => {
                e.preventDefault();
                loadBanner(parseInt(item.dataset.banner, 10));
            });
        });

        function createFrame(banner) {
            const iframe = document.createElement('iframe');
            iframe.id = 'banner-iframe';
            iframe.src = banner.path + '/index.html';
            iframe.width = banner.width;
            iframe.height = banner.height;
            iframe.title = banner.name + ' Preview';
            return iframe;
        }

        function replayBanner() {
            const oldIframe = document.getElementById('banner-iframe');
            oldIframe.parentNode.replaceChild(createFrame(banners[currentBanner]), oldIframe);
        }

        function loadBanner(index) {
            const banner = banners[index];
            currentBanner = index;

            document.querySelectorAll('.dropdown-item').forEach((item, i) => {
                item.classList.toggle('active', i === index);
            });

            document.getElementById('banner-info').innerHTML = `
                <h2>${banner.name}</h2>
                <p>${banner.width} &times; ${banner.height} pixels</p>
                <p class="banner-size">Bundle size: ${banner.sizeFormatted}</p>
            `;

            const frame = document.getElementById('banner-frame');
            frame.style.width = banner.width + 'px';
            frame.style.height = banner.height + 'px';
            replayBanner();

            document.getElementById('view-full-btn').href = banner.path + '/index.html';
            document.getElementById('view-files-btn').href = banner.path;

            hamburger.classList.remove('active');
            dropdown.classList.remove('active');
        }

        document.addEventListener('keydown', (e) => {
            if (!banners.length) return;
            if (e.key === 'ArrowLeft' && currentBanner > 0) {
                loadBanner(currentBanner - 1);
            } else if (e.key === 'ArrowRight' && currentBanner < banners.length - 1) {
                loadBanner(currentBanner + 1);
            }
        });
    </script>
</body>
</html>
"""


@dataclass
class ReviewEntry:
    name: str
    size: Size
    directory: Path
    total_bytes: int

    @property
    def size_formatted(self) -> str:
        return format_bytes(self.total_bytes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'width': self.size.width,
            'height': self.size.height,
            'path': f"banners/{self.name}",
            'sizeBytes': self.total_bytes,
            'sizeFormatted': self.size_formatted,
        }


def get_directory_size(dir_path: Path) -> int:
    """Total size in bytes of all files below a directory."""
    return sum(path.stat().st_size for path in dir_path.rglob('*') if path.is_file())


def format_bytes(num_bytes: int) -> str:
    """Format bytes to a human readable string, e.g. '12.3 KB'."""
    if num_bytes <= 0:
        return "0 B"
    units = ["B", "KB", "MB"]
    exponent = min(int(math.log(num_bytes, 1024)), len(units) - 1)
    value = round(num_bytes / 1024 ** exponent, 1)
    return f"{value:g} {units[exponent]}"


class ReviewGenerator:
    """
    Generates the review page for all banners.
    """

    def __init__(self, config: Optional[BannerConfig] = None,
                 project_info: Optional[ProjectInfo] = None):
        self.config = config or BannerConfig()
        self.project_info = project_info or load_project_info(self.config.project_root)
        self.logger = logging.getLogger(__name__)
        self.environment = Environment(autoescape=True)

    def get_banner_info(self) -> List[ReviewEntry]:
        """
        Collect name, dimensions and on-disk size of every banner.

        Sizes are measured on the compiled banner when the review tree has
        one, otherwise on the source directory.
        """
        banner_root = self.config.banner_root
        if not banner_root.is_dir():
            return []

        entries = []
        for banner_dir in sorted(banner_root.iterdir()):
            if not banner_dir.is_dir() or self.config.is_private(banner_dir.name):
                continue

            compiled_dir = self.config.review_root / 'banners' / banner_dir.name
            measured_dir = compiled_dir if compiled_dir.is_dir() else banner_dir

            entries.append(ReviewEntry(
                name=banner_dir.name,
                size=extract_dimensions(banner_dir.name),
                directory=measured_dir,
                total_bytes=get_directory_size(measured_dir),
            ))
        return entries

    def render(self, entries: List[ReviewEntry]) -> str:
        template = self.environment.from_string(REVIEW_TEMPLATE)
        return template.render(
            project=self.project_info,
            banners=[entry.to_dict() for entry in entries],
        )

    def generate_review_page(self) -> Path:
        """
        Generate the review HTML page.

        Returns:
            Path of the written page
        """
        entries = self.get_banner_info()
        html = self.render(entries)

        self.config.review_root.mkdir(parents=True, exist_ok=True)
        review_path = self.config.review_root / 'index.html'
        with open(review_path, 'w', encoding='utf-8') as f:
            f.write(html)

        self.logger.info(f"✅ Review page generated: {review_path}")
        self.logger.info(f"📱 Found {len(entries)} banners")
        return review_path


def main():
    """Command-line entry point."""
    parser = argparse.ArgumentParser(description='Generate the banner review page')
    add_common_arguments(parser)
    args = parser.parse_args()

    setup_logging(args.verbose)

    try:
        ReviewGenerator(config_from_args(args)).generate_review_page()
    except Exception as e:
        print(f"❌ Review generation failed: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
