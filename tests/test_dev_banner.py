import sys

import pytest

import dev_banner
from dev_banner import BannerDevHelper, exit_status

from conftest import write

ENV_CHECK = (
    "import os, sys; "
    "sys.exit(0 if (os.environ.get('BANNER'), os.environ.get('NODE_ENV')) == "
    "('728x90-1', 'development') else 3)"
)
KILLED_BY_SIGTERM = "import os, signal; os.kill(os.getpid(), signal.SIGTERM)"


@pytest.fixture
def banners(config):
    write(config.banner_root / '728x90-1/index.html', '<html></html>')
    write(config.banner_root / '300x250-1/index.html', '<html></html>')
    write(config.banner_root / '_template/index.html', '<html></html>')
    (config.banner_root / 'no-index').mkdir()
    return config


def test_available_banners(banners):
    assert BannerDevHelper(banners).available_banners() == ['300x250-1', '728x90-1']


def test_unknown_banner_is_rejected(banners):
    with pytest.raises(FileNotFoundError, match='"970x90-1" not found'):
        BannerDevHelper(banners).start_dev('970x90-1')


def test_missing_banner_name_is_rejected(banners):
    with pytest.raises(FileNotFoundError):
        BannerDevHelper(banners).start_dev(None)


def test_dev_server_receives_banner_selection(banners):
    helper = BannerDevHelper(banners, command=[sys.executable, '-c', ENV_CHECK])
    assert helper.start_dev('728x90-1') == 0


def test_start_defaults_to_selected_banner(banners, monkeypatch):
    monkeypatch.setattr(dev_banner, 'DEV_SERVER_COMMAND', [sys.executable, '-c', ENV_CHECK])
    monkeypatch.setenv('BANNER', '728x90-1')

    dev_banner.main(['start', '--project-root', str(banners.project_root)])


def test_exit_status_maps_signals():
    assert exit_status(0) == 0
    assert exit_status(2) == 2
    assert exit_status(-15) == 143


def test_cli_exit_status_when_dev_server_is_killed(banners, monkeypatch):
    monkeypatch.setattr(dev_banner, 'DEV_SERVER_COMMAND', [sys.executable, '-c', KILLED_BY_SIGTERM])
    monkeypatch.delenv('BANNER', raising=False)

    with pytest.raises(SystemExit) as exc:
        dev_banner.main(['728x90-1', '--project-root', str(banners.project_root)])

    assert exc.value.code == 143


def test_cli_unknown_banner_exits_with_listing(banners, capsys):
    with pytest.raises(SystemExit) as exc:
        dev_banner.main(['970x90-1', '--project-root', str(banners.project_root)])

    assert exc.value.code == 1
    out = capsys.readouterr().out
    assert 'Banner "970x90-1" not found.' in out
    assert '• 728x90-1' in out


def test_cli_list(banners, capsys):
    dev_banner.main(['list', '--project-root', str(banners.project_root)])
    assert '• 300x250-1' in capsys.readouterr().out
