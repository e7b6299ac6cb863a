"""
Tests for the version module of the Safe relayer SDK.
"""
import importlib
import re
from importlib import metadata as importlib_metadata
from unittest.mock import mock_open, patch

from relayer_sdk import __version__


def _not_installed(name):
    raise importlib_metadata.PackageNotFoundError(name)


def test_version_format():
    """Test that the version string follows semantic versioning"""
    assert re.match(r'^\d+\.\d+\.\d+', __version__), "Version should follow semantic versioning"


@patch('importlib.metadata.version')
def test_version_from_metadata(mock_metadata_version):
    """When metadata lookup succeeds, version comes from metadata"""
    mock_metadata_version.return_value = "2.3.4"
    import relayer_sdk.version as vmod
    importlib.reload(vmod)
    assert vmod.__version__ == "2.3.4"
    mock_metadata_version.assert_called_with("relayer-sdk")


@patch('importlib.metadata.version', side_effect=_not_installed)
@patch('pathlib.Path.open', new_callable=mock_open, read_data=b'[project]\nversion = "1.2.3"\n')
def test_version_from_file(mock_open_file, mock_metadata_version):
    """When metadata lookup fails, pyproject.toml is read"""
    import relayer_sdk.version as vmod
    importlib.reload(vmod)
    assert vmod.__version__ == "1.2.3"


def test_version_file_not_found(monkeypatch):
    """If pyproject.toml is missing, fallback to default"""
    monkeypatch.setattr(importlib_metadata, 'version', _not_installed)

    def missing(*args, **kwargs):
        raise FileNotFoundError()

    monkeypatch.setattr('pathlib.Path.open', missing)
    import relayer_sdk.version as vmod
    importlib.reload(vmod)
    assert vmod.__version__ == "0.1.0"


def test_version_key_error(monkeypatch):
    """If TOML exists but has no version key, fallback to default"""
    monkeypatch.setattr(importlib_metadata, 'version', _not_installed)
    monkeypatch.setattr('pathlib.Path.open', mock_open(read_data=b'[project]\nname = "relayer-sdk"\n'))
    import relayer_sdk.version as vmod
    importlib.reload(vmod)
    assert vmod.__version__ == "0.1.0"


def test_version_toml_decode_error(monkeypatch):
    """If TOML parse fails, fallback to default"""
    monkeypatch.setattr(importlib_metadata, 'version', _not_installed)
    monkeypatch.setattr('pathlib.Path.open', mock_open(read_data=b'invalid toml content ['))
    import relayer_sdk.version as vmod
    importlib.reload(vmod)
    assert vmod.__version__ == "0.1.0"


def test_get_version_reads_given_pyproject(monkeypatch, tmp_path):
    """A source checkout reports the version declared in its pyproject.toml"""
    import relayer_sdk.version as vmod
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_bytes(b'[project]\nname = "relayer-sdk"\nversion = "9.8.7"\n')
    monkeypatch.setattr(importlib_metadata, 'version', _not_installed)
    monkeypatch.setattr(vmod, 'PYPROJECT_PATH', pyproject)
    assert vmod.get_version() == "9.8.7"

    monkeypatch.setattr(vmod, 'PYPROJECT_PATH', tmp_path / "missing.toml")
    assert vmod.get_version() == vmod.DEFAULT_VERSION
