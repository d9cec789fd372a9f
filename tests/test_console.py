import imageio.v3 as iio
import numpy as np
import pytest

from appdesk.console import argexec, argparser


def test_parser_register_arguments():
    args = argparser().parse_args([
        'register', 'org.example.app', 'Example', '--category', 'Game', '-i', 'a.svg', '-i', 'b.png',
        '--action=new:New game:--new', '--action', 'open:Open:--url=http://example.org',
        '--uninstall', '--uninstall_path', '/tmp/example',
        '--mime', 'application/x-example', 'Example', '*.example', '--auto_associate'])

    assert args.command == 'register'
    assert args.icon == ['a.svg', 'b.png']
    assert args.action == [('new', 'New game', '--new'), ('open', 'Open', '--url=http://example.org')]
    assert args.mime == ['application/x-example', 'Example', '*.example']
    assert args.auto_associate and args.uninstall


@pytest.mark.parametrize('value', ['new', 'new:New game', ':New game:--new', 'new::--new'])
def test_parser_rejects_bad_action(value):
    with pytest.raises(SystemExit):
        argparser().parse_args(['register', 'org.example.app', 'Example', f'--action={value}'])


def test_register_action_in_desktop_file(desktop_env):
    assert argexec(['register', 'org.example.app', 'Example', '--action=new:New window:--new-window']) == 0

    text = (desktop_env.applications / 'org.example.app.desktop').read_text()
    assert 'Actions=new\n' in text
    assert '[Desktop Action new]\nName=New window\n' in text
    assert '--new-window\n' in text


def test_register_and_check(desktop_env, refresh_calls, tmp_path, capsys):
    icon = tmp_path / 'example.png'
    icon.write_bytes(iio.imwrite('<bytes>', np.zeros((32, 32, 4), dtype='uint8'), extension='.png'))

    assert argexec(['check', 'org.example.app']) == 1

    assert argexec(['register', 'org.example.app', 'Example', '-i', str(icon), '--uninstall',
                    '--mime', 'application/x-example', 'Example', '*.example']) == 0

    assert (desktop_env.applications / 'org.example.app.desktop').exists()
    assert (desktop_env.icons / 'hicolor' / '32x32' / 'apps' / 'org.example.app.png').exists()
    assert (desktop_env.uninstalls / 'org.example.app.sh').exists()
    assert len(refresh_calls) == 2

    assert argexec(['check', 'org.example.app']) == 0
    assert 'org.example.app: registered' in capsys.readouterr().out


def test_register_skipped_when_registered(desktop_env, monkeypatch):
    monkeypatch.delenv('APPIMAGE')
    assert argexec(['register', 'org.example.app', 'Example']) == 0
    assert not desktop_env.applications.exists()


def test_register_failure_exit_code(desktop_env, monkeypatch, tmp_path):
    monkeypatch.setenv('APPDIR', str(tmp_path / 'gone'))
    assert argexec(['register', 'org.example.app', 'Example', '--force']) == 1


def test_test_command_cleans_up(desktop_env, tmp_path, capsys):
    squash = tmp_path / 'extracted'
    squash.mkdir()

    assert argexec(['test', str(desktop_env.app_image), 'org.example.app', 'Example',
                    '--squash_path', str(squash), '--uninstall']) == 0

    assert not (desktop_env.applications / 'org.example.app.desktop').exists()
    assert not (desktop_env.uninstalls / 'org.example.app.sh').exists()
    assert 'Removed' in capsys.readouterr().out
