from pathlib import Path
from tempfile import TemporaryDirectory
import pytest
from pardu._config import ConfigException
from pardu._config import default_config
from pardu._config import read_config


def write_config(rawpath, text):
    path = Path(rawpath).joinpath('pardu.toml')
    path.write_text(text)
    return path


def test_defaults():
    assert default_config() == {'errors': 'skip', 'verbose': False}


def test_empty_file():
    with TemporaryDirectory() as rawpath:
        path = write_config(rawpath, '')
        assert read_config(path) == default_config()


def test_read():
    with TemporaryDirectory() as rawpath:
        path = write_config(rawpath, """
            errors = "access"
            verbose = true
            """)
        assert read_config(path) == {'errors': 'access', 'verbose': True}


def test_missing_file():
    with TemporaryDirectory() as rawpath:
        with pytest.raises(ConfigException):
            read_config(Path(rawpath).joinpath('nope.toml'))


def test_malformed():
    with TemporaryDirectory() as rawpath:
        path = write_config(rawpath, 'errors = ')
        with pytest.raises(ConfigException):
            read_config(path)


def test_unknown_key():
    with TemporaryDirectory() as rawpath:
        path = write_config(rawpath, 'threads = 4\n')
        with pytest.raises(ConfigException, match='threads'):
            read_config(path)


def test_invalid_errors():
    with TemporaryDirectory() as rawpath:
        path = write_config(rawpath, 'errors = "ignore"\n')
        with pytest.raises(ConfigException):
            read_config(path)


def test_invalid_verbose():
    with TemporaryDirectory() as rawpath:
        path = write_config(rawpath, 'verbose = "yes"\n')
        with pytest.raises(ConfigException):
            read_config(path)
