import logging
import subprocess
from types import SimpleNamespace

import pytest

from appdesk.core import conf
from appdesk.install import mime


@pytest.fixture
def desktop_env(tmp_path, monkeypatch):
    """A fake user home with a running bundle whose path contains a space."""
    home = tmp_path / 'home'
    home.mkdir()
    monkeypatch.setenv('HOME', str(home))
    monkeypatch.setenv('XDG_DATA_HOME', str(home / '.local' / 'share'))
    monkeypatch.setenv('XDG_CONFIG_HOME', str(home / '.config'))

    bundle_folder = tmp_path / 'My Apps'
    bundle_folder.mkdir()
    app_image = bundle_folder / 'Example App.AppImage'
    app_image.write_bytes(b'\x7fELF')

    app_dir = tmp_path / 'squashfs-root'
    app_dir.mkdir()

    monkeypatch.setenv('APPIMAGE', str(app_image))
    monkeypatch.setenv('APPDIR', str(app_dir))

    conf.reset()
    conf.configure()

    yield SimpleNamespace(
        home=home,
        applications=home / '.local' / 'share' / 'applications',
        icons=home / '.icons',
        uninstalls=home / '.local' / 'share' / 'app-image-uninstalls',
        mime=home / '.local' / 'share' / 'mime',
        mimeapps=home / '.config' / 'mimeapps.list',
        app_image=app_image,
        app_dir=app_dir)

    conf.reset()


@pytest.fixture(autouse=True)
def drop_console_handler():
    yield
    for handler in list(logging.root.handlers):
        if handler.get_name() == 'boot':
            logging.root.removeHandler(handler)


@pytest.fixture
def refresh_calls(monkeypatch):
    """Record the database refresh commands instead of running them."""
    calls = []

    def fake_run(args, **kwargs):
        calls.append(list(args))
        return subprocess.CompletedProcess(args, 0)

    monkeypatch.setattr(mime.subprocess, 'run', fake_run)
    return calls
