import os
import sys
import time
from collections.abc import Mapping
from pathlib import Path
import json
import importlib.util
import copy
import re
import logging

logger = logging.getLogger(__name__)

config = dict()
configured = False

here = Path(__file__).parent.absolute()

FIRST_CONFIG_FILE = here.parent / 'config' / 'defaults.json'

REQUIRED = [
    ('numpy', 'numpy'),
    ('imageio', 'imageio'),
    ('packaging', 'packaging'),
    ('appdesk', 'appdesk'),
]

PATHPATTERN = re.compile(r'path_\w*')


def deep_update(source, overrides):
    """
    Update a nested dictionary or similar mapping.
    Modify ``source`` in place.
    """
    for key, value in overrides.items():
        if isinstance(value, Mapping) and value:
            returned = deep_update(source.get(key, {}), value)
            source[key] = returned
        else:
            source[key] = overrides[key]
            if PATHPATTERN.match(str(key)):
                if not source[key] is None:
                    if isinstance(source[key], list):
                        source[key] = [os.path.expandvars(val) for val in source[key]]
                    else:
                        source[key] = os.path.expandvars(source[key])
    return source


def deep_diff(dict1, dict2):
    """
    Difference of nested dictionary or similar mapping.
    """
    common_keys = set(dict1.keys()).intersection(set(dict2.keys()))
    dict2_keys_only = set(dict2.keys()).difference(set(dict1.keys()))

    result = dict((key, dict2[key]) for key in dict2_keys_only)

    for key in common_keys:
        value1 = dict1[key]
        value2 = dict2[key]
        if isinstance(value1, Mapping):
            assert isinstance(value2, Mapping)
            value = deep_diff(value1, value2)
            if len(value) > 0:
                result[key] = value
        elif value1 != value2:
            result[key] = value2

    return result


def list_packages(packages):
    for (package, base) in packages:
        found = importlib.util.find_spec(base)
        if found is None:
            logger.debug(f'{package}:\n    NOT FOUND')
        else:
            modified = os.path.getmtime(found.origin)
            modified_str = time.strftime('%Y-%b-%d %H:%M:%S', time.gmtime(modified))
            origin = Path(found.origin)
            logger.debug(f'{package}:\n    {origin.parent}\n    {origin.name}: {modified_str}')


def configure(**overwrites):
    """
    Load the default configuration, the user config files and the overwrites.

    Only the first call has effect, use ``reset`` to allow reconfiguring.
    """
    global configured

    if configured:
        name = sys._getframe(1).f_globals['__name__']
        logger.warning(f'configure unexpected called from {name} but already configured, no reconfiguring done')
        return
    else:
        configured = True

    config_file = FIRST_CONFIG_FILE
    logger.debug(f'Loading config: {config_file}')
    deep_update(config, load_config(config_file))

    config_files = list(overwrites.get('path_config_files', None) or config.get('path_config_files', []))

    while len(config_files) > 0:
        next_config_file = config_files.pop(0)
        config_file = Path(next_config_file).expanduser()
        if not config_file.exists():
            logger.debug(f'Configfile not found: {config_file}')
            continue
        logger.info(f'Loading config: {config_file}')
        loaded = load_config(config_file)
        deep_update(config, loaded)
        config_files.extend(loaded.get('path_config_files', []))

    deep_update(config, overwrites)

    logging.root.setLevel(config['logging_level'])

    if config['debug'].get('list_packages', False):
        list_packages(REQUIRED)


def ensure_configured():
    if not configured:
        configure()
    return config


def reset():
    """Forget the current configuration, the next configure loads it again."""
    global configured
    config.clear()
    configured = False


def save_config_json(path=None):
    current_config = copy.deepcopy(config)
    save_config = not_defaults(current_config)
    with open(path, 'w') as fp:
        json.dump(save_config, fp, indent=2)


def load_config(path):
    config_file = Path(path)

    if config_file.suffix in ['.json']:
        config_dict = load_config_json(config_file)

    else:
        raise ValueError(f'Unsupported config file type {config_file.suffix}')

    return config_dict


def load_config_json(path=None):
    with open(path, 'r') as fp:
        loaded_config = json.load(fp)
    return loaded_config


def not_defaults(current_config):
    defaults = {}
    deep_update(defaults, load_config(FIRST_CONFIG_FILE))
    return deep_diff(defaults, current_config)


def config_path(key):
    """Return the configured path for ``key`` expanded, or None if not set."""
    value = ensure_configured().get(key)
    if value is None:
        return None
    return Path(os.path.expandvars(value)).expanduser()
