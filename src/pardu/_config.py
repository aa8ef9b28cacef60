"""Reads the optional TOML config file.

Example:

    errors = "access"
    verbose = true
"""


import toml
from pardu import walker


_DEFAULTS = {
    'errors': walker.ERRORS_SKIP,
    'verbose': False,
}


class ConfigException(Exception):
    """Indicates the config file is missing or invalid."""
    pass


def default_config():
    """Returns a dict containing the default value of every setting."""
    return dict(_DEFAULTS)


def read_config(path):
    """Returns a dict of settings read from the TOML file at path.

    Settings absent from the file take their default values.
    Raises ConfigException if the file can't be read or contains
    unknown keys or invalid values.
    """
    try:
        raw = toml.load(path)
    except (OSError, toml.TomlDecodeError) as e:
        raise ConfigException(f'could not read config {path}: {e}') from e

    unknown = sorted(set(raw) - set(_DEFAULTS))
    if unknown:
        raise ConfigException(
            f'unknown config keys in {path}: {", ".join(unknown)}')

    cfg = default_config()
    cfg.update(raw)
    if cfg['errors'] not in walker.ERROR_POLICIES:
        raise ConfigException(f'invalid errors setting (expected one of '
                              f'{walker.ERROR_POLICIES}): {cfg["errors"]}')
    if not isinstance(cfg['verbose'], bool):
        raise ConfigException(
            f'invalid verbose setting (expected true or false): '
            f'{cfg["verbose"]}')
    return cfg
