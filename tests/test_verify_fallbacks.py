import pytest
from PIL import Image

import verify_fallbacks as fallback_script
from verify_fallbacks import verify_fallbacks

from conftest import write


def save_jpeg(path, size):
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new('RGB', size, color=(200, 30, 30)).save(path, format='JPEG')


def test_verify_fallbacks_summary(config, caplog):
    save_jpeg(config.banner_root / '300x250-1/fallback.jpg', (300, 250))
    save_jpeg(config.banner_root / '728x90-1/fallback.jpg', (727, 92))
    save_jpeg(config.banner_root / '160x600-1/fallback.jpg', (300, 250))
    (config.banner_root / '970x90-1').mkdir()
    write(config.banner_root / '320x50-1/fallback.jpg', b'not an image', binary=True)
    save_jpeg(config.banner_root / '_template/fallback.jpg', (1, 1))

    summary = verify_fallbacks(config)

    assert summary == {'checked': 3, 'correct': 2, 'mismatched': 1, 'missing': 1, 'unreadable': 1}
    assert '160x600-1: 300x250 (Expected: 160x600)' in caplog.text


def test_verify_fallbacks_without_banner_root(config):
    assert verify_fallbacks(config)['checked'] == 0


def test_cli_summary_reports_unreadable_images(config, capsys):
    save_jpeg(config.banner_root / '300x250-1/fallback.jpg', (300, 250))
    write(config.banner_root / '320x50-1/fallback.jpg', b'not an image', binary=True)

    with pytest.raises(SystemExit) as exc:
        fallback_script.main(['--project-root', str(config.project_root)])

    assert exc.value.code == 1
    out = capsys.readouterr().out
    assert 'Total checked: 1' in out
    assert 'Unreadable: 1' in out
    assert 'Missing: 0' in out
