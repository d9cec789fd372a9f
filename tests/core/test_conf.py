import json
import logging

import pytest

from appdesk.core import conf


@pytest.fixture
def fresh_config(tmp_path, monkeypatch):
    monkeypatch.setenv('HOME', str(tmp_path))
    conf.reset()
    yield conf.config
    conf.reset()


def test_defaults_loaded(fresh_config):
    conf.configure()
    assert fresh_config['env_appimage'] == 'APPIMAGE'
    assert fresh_config['mime']['refresh_timeout'] == 30
    assert fresh_config['path_icons'] is None


def test_user_config_file_merged(fresh_config, tmp_path):
    user_config = tmp_path / '.config' / 'appimage-desk' / 'config.json'
    user_config.parent.mkdir(parents=True)
    user_config.write_text(json.dumps({'mime': {'refresh_timeout': 5}, 'uninstall_folder_name': 'uninstalls'}))

    conf.configure()

    assert fresh_config['mime']['refresh_timeout'] == 5
    assert fresh_config['mime']['update_mime_database'] == 'update-mime-database'
    assert fresh_config['uninstall_folder_name'] == 'uninstalls'


def test_overwrites_win(fresh_config, tmp_path):
    extra = tmp_path / 'extra.json'
    extra.write_text(json.dumps({'env_appimage': 'FROM_FILE'}))

    conf.configure(path_config_files=[str(extra)], env_appdir='FROM_KWARGS')

    assert fresh_config['env_appimage'] == 'FROM_FILE'
    assert fresh_config['env_appdir'] == 'FROM_KWARGS'


def test_second_configure_is_ignored(fresh_config, caplog):
    conf.configure(env_appimage='FIRST')
    with caplog.at_level(logging.WARNING):
        conf.configure(env_appimage='SECOND')
    assert fresh_config['env_appimage'] == 'FIRST'
    assert 'already configured' in caplog.text


def test_path_keys_expand_vars(fresh_config, monkeypatch):
    monkeypatch.setenv('ICON_ROOT', '/srv/icons')
    conf.configure(path_icons='$ICON_ROOT/theme')
    assert fresh_config['path_icons'] == '/srv/icons/theme'


def test_save_only_differences(fresh_config, tmp_path):
    conf.configure(uninstall_folder_name='other')
    target = tmp_path / 'saved.json'
    conf.save_config_json(target)
    assert json.loads(target.read_text()) == {'uninstall_folder_name': 'other'}


def test_unsupported_config_type(tmp_path):
    with pytest.raises(ValueError):
        conf.load_config(tmp_path / 'config.toml')
