import shlex
import stat
from pathlib import Path

import pytest

from appdesk.install.paths import PathData
from appdesk.install.request import make_request
from appdesk.install.uninstall import create_uninstall_file, removal_line


def make_path_data(tmp_path):
    path_data = PathData(tmp_path / 'My Apps' / 'Example.AppImage', tmp_path / 'apps' / 'org.example.app.desktop')
    path_data.icon_paths = [tmp_path / 'icons' / 'org.example.app.svg',
                            tmp_path / 'icons' / 'hicolor' / '48x48' / 'apps' / 'org.example.app.png']
    return path_data


def test_removal_line():
    assert removal_line('/home/me/.cache/example.db') == 'rm -f /home/me/.cache/example.db'
    assert removal_line('/home/me/.config/example') == 'rm -rf /home/me/.config/example'
    assert removal_line('/home/me/My Apps/a.txt') == "rm -f '/home/me/My Apps/a.txt'"


@pytest.mark.parametrize('path', ['/data/$HOME.log', '/data/`id`.log', '/data/say "hi".log', "/data/it's.log"])
def test_removal_line_is_not_expanded(path):
    assert removal_line(path) == f'rm -f {shlex.quote(path)}'
    assert shlex.split(removal_line(path)) == ['rm', '-f', path]


def test_script_content_and_mode(desktop_env, tmp_path):
    request = make_request('org.example.app', 'Example', add_uninstall_action=True,
                           additional_uninstall_paths=['/data/example', '/data/example.log'])
    path_data = make_path_data(tmp_path)
    folder = tmp_path / 'uninstalls'

    action = create_uninstall_file(request, path_data, folder)

    script = folder / 'org.example.app.sh'
    assert path_data.uninstall_file_path == script

    lines = script.read_text().split('\n')
    assert lines[0] == '#!/usr/bin/env bash'
    assert lines[2:] == [
        f'rm -f {shlex.quote(str(path_data.desktop_file_path))}',
        f'rm -f {shlex.quote(str(path_data.app_image_path))}',
        f'rm -f {shlex.quote(str(script))}',
        'rm -rf /data/example',
        'rm -f /data/example.log',
        f'rm -f {shlex.quote(str(path_data.icon_paths[0]))}',
        f'rm -f {shlex.quote(str(path_data.icon_paths[1]))}',
        '',
    ]

    mode = stat.S_IMODE(script.stat().st_mode)
    assert mode == stat.S_IRUSR | stat.S_IWUSR | stat.S_IXUSR | stat.S_IXGRP

    assert action.code == 'remove'
    assert action.name == 'Uninstall Example'
    assert action.command == str(script)
    assert action.icon == 'edit-delete-symbolic'


def test_script_is_byte_identical_on_rerun(desktop_env, tmp_path):
    request = make_request('org.example.app', 'Example', add_uninstall_action=True)
    folder = tmp_path / 'uninstalls'

    create_uninstall_file(request, make_path_data(tmp_path), folder)
    first = (folder / 'org.example.app.sh').read_bytes()
    create_uninstall_file(request, make_path_data(tmp_path), folder)
    second = (folder / 'org.example.app.sh').read_bytes()

    assert first == second
    assert b'\r' not in first


def test_request_is_not_changed(desktop_env, tmp_path):
    request = make_request('org.example.app', 'Example', add_uninstall_action=True)
    create_uninstall_file(request, make_path_data(tmp_path), tmp_path / 'uninstalls')
    assert request.custom_actions == []
