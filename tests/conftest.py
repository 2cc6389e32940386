import json
from pathlib import Path

import pytest

from banner_config import BannerConfig

REFERENCE_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="ad.size" content="width=300,height=250">
    <title>Ad Banner: 300x250</title>
    <link rel="stylesheet" href="assets/css/source.css">
</head>
<body>
    <div id="ad" data-size="{{width}}x{{height}}">
        <img src="assets/img/logo.png" width="{{width}}" height="{{height}}" alt="">
    </div>
    <script src="assets/js/script.js"></script>
</body>
</html>
"""

REFERENCE_CSS = """$width: 300px;
$height: 250px;

#ad {
    width: {{width}}px;
    height: {{ height }}px;
    max-width: 300px;
}
"""

REFERENCE_JS = "gsap.timeline().to('#ad', { width: '{{width}}px' });\n"


def write(path: Path, content, binary: bool = False) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    if binary:
        path.write_bytes(content)
    else:
        path.write_text(content, encoding='utf-8')
    return path


@pytest.fixture
def config(tmp_path):
    return BannerConfig(project_root=tmp_path)


@pytest.fixture
def reference(config):
    """A valid reference banner at banners/300x250-1."""
    ref = config.reference_dir
    write(ref / 'index.html', REFERENCE_HTML)
    write(ref / 'assets/css/source.css', REFERENCE_CSS)
    write(ref / 'assets/js/script.js', REFERENCE_JS)
    write(ref / 'assets/img/logo.png', b'\x89PNG fake', binary=True)
    write(ref / 'fallback.jpg', b'\xff\xd8 fake jpeg', binary=True)
    return ref


@pytest.fixture
def project_metadata(tmp_path):
    write(tmp_path / 'package.json', json.dumps({'name': '25-tac-027', 'title': 'Spring Campaign'}))


def compiled_banner_html(stylesheets=(), images=()):
    links = "\n".join(f'    <link rel="stylesheet" href="../../assets/css/{css}">' for css in stylesheets)
    imgs = "\n".join(f'    <img src="../../assets/img/{img}" alt="">' for img in images)
    return f"""<!DOCTYPE html>
<html>
<head>
{links}
</head>
<body>
    <div id="ad">
{imgs}
    </div>
    <script src="assets/js/script.js"></script>
</body>
</html>
"""


@pytest.fixture
def review_tree(config):
    """
    A compiled review tree with two banners, 300x250 and 970x90, sharing a
    stylesheet that pulls in an image through url().
    """
    review = config.review_root
    write(review / 'assets/css/main-1a2b.css', "#ad { background: url(../img/bg-9f8e.png) no-repeat; }\n")
    write(review / 'assets/css/unused-0000.css', "body { color: red; }\n")
    write(review / 'assets/img/logo-3c4d.png', b'\x89PNG logo', binary=True)
    write(review / 'assets/img/bg-9f8e.png', b'\x89PNG bg', binary=True)

    write(review / 'banners/300x250/index.html',
          compiled_banner_html(['main-1a2b.css', 'missing-ffff.css'], ['logo-3c4d.png']))
    write(review / 'banners/300x250/assets/js/script.js', "console.log('300x250');\n")

    write(review / 'banners/970x90/index.html', compiled_banner_html(['main-1a2b.css']))
    write(review / 'banners/970x90/assets/js/script.js', "console.log('970x90');\n")
    write(review / 'banners/970x90/assets/js/vendor/gsap.min.js', "/* gsap */\n")

    write(review / 'banners/_template/index.html', compiled_banner_html())

    write(config.banner_root / '300x250/fallback.jpg', b'\xff\xd8 fallback', binary=True)
    return review
