"""
Manage configurations.

Settings are read from a JSON file `config.json` that is searched for
in the working directory and in ~/.config/cellpairs.  Settings that
are not present in the file fall back to the defaults below.

"""

import copy
import json
import logging
import os
import shutil
from typing import List, Union

from .exceptions import ConfigurationError

__author__ = "The cellpairs developers"
__date__ = "2026-10-19"

logger = logging.getLogger(__name__)

DEFAULT = {
    "nblist": {
        # systems with at most this many points are paired by the
        # all-pairs scan in NeighborList.get_all_pairs()
        "naive_threshold": 16,
        # upper bound for the total number of voxels of a grid
        "max_voxels": 1000000,
    }
}

PATHS = [
    '.',
    os.path.join(os.path.expanduser("~"), ".config", "cellpairs")
]


def config_file_path():
    """
    Search for configuration file and return path if found.

    """
    config_file = None
    for p in PATHS:
        path = os.path.join(p, "config.json")
        if os.path.exists(path):
            config_file = path
            break
    return config_file


def valid_setting(setting):
    """
    Check if a given setting actually exists.

    """
    return setting in DEFAULT


def _merge(config_dict, new_settings):
    if not isinstance(new_settings, dict):
        raise ConfigurationError(
            "Configuration must be a JSON object, got {!r}.".format(
                new_settings))
    for setting, value in new_settings.items():
        if isinstance(config_dict.get(setting), dict):
            if not isinstance(value, dict):
                raise ConfigurationError(
                    "Setting '{}' must be a JSON object, got {!r}.".format(
                        setting, value))
            config_dict[setting].update(value)
        else:
            config_dict[setting] = value


def read_config(config_file=None):
    """
    Search for configuration file and read if found.

    Each setting of the file is merged into the corresponding default
    section, so that a file only needs to contain the values it
    changes.

    """
    config_dict = copy.deepcopy(DEFAULT)
    if config_file is None:
        config_file = config_file_path()
    if config_file is not None:
        with open(config_file) as fp:
            try:
                file_dict = json.load(fp)
            except json.JSONDecodeError as e:
                raise ConfigurationError(
                    "Invalid configuration file {}: {}".format(config_file, e))
        _merge(config_dict, file_dict)
    return config_dict


def write_config(config_dict, config_file=None, replace=False):
    """
    Write settings to a configuration file.

    Args:
      config_dict (dict): dict with settings
      config_file (str): (optional) path to a configuration file
      replace (bool): if True, replace existing configuration file

    """
    config_dict = dict(config_dict)
    settings = list(config_dict.keys())
    for setting in settings:
        if not valid_setting(setting):
            config_dict.pop(setting)
            logger.warning("Unknown setting '%s' ignored.", setting)
    if config_file is None:
        config_file = config_file_path()
    if config_file is None:
        os.makedirs(PATHS[-1], exist_ok=True)
        config_file = os.path.join(PATHS[-1], "config.json")
    elif os.path.exists(config_file):
        shutil.copy2(config_file, config_file + ".bak")
        if not replace:
            config_dict_orig = read_config(config_file)
            _merge(config_dict_orig, config_dict)
            config_dict = config_dict_orig
    with open(config_file, "w") as fp:
        json.dump(config_dict, fp)


def read(settings: Union[str, List[str]], config_file: os.PathLike = None):
    """
    Args:
      settings: one or more settings to read
      config_file: path to the config file

    Returns:
      If `settings` is a string, return only the result for this setting.
      If `settings` is a list, return list of results.

    """
    if hasattr(settings, 'lower'):
        settings = [settings]
        return_single = True
    else:
        return_single = False

    config_dict = read_config(config_file)

    result = []
    for setting in settings:
        if setting not in config_dict:
            raise KeyError('Not a valid setting: {}'.format(setting))
        result.append(config_dict[setting])

    if return_single:
        return result[0]
    else:
        return result
