"""Tests for adapter configuration.

The configuration can be built in code or loaded from a JSON file, in
which case any key left out keeps its default.
"""

import json
from pathlib import Path

import pytest

from py_hostfs.config import (
    READ_ONLY_PERMISSIONS,
    READ_WRITE_PERMISSIONS,
    TIMESTAMP_KEYS,
    AdapterConfig,
    load_config,
)
from py_hostfs.errors import DEFAULT_ERROR_CODE, ConfigError


class TestDefaults:
    """Verify the built-in defaults."""

    def test_defaults(self) -> None:
        """A bare config uses the standard values."""
        config = AdapterConfig()
        assert config.error_code == DEFAULT_ERROR_CODE
        assert config.read_only_permissions == "r-xr-xr-x"
        assert config.read_write_permissions == "rwxrwxrwx"
        assert config.timestamp_keys == ("modification", "modified", "created")
        assert config.timestamp_divisor == 1

    def test_rejects_non_positive_divisor(self) -> None:
        """A zero divisor cannot convert timestamps."""
        with pytest.raises(ConfigError, match="timestamp_divisor"):
            AdapterConfig(timestamp_divisor=0)


class TestLoadConfig:
    """Verify loading from JSON."""

    def test_full_file(self, tmp_path: Path) -> None:
        """Every key in the file is used."""
        path = tmp_path / "hostfs.json"
        path.write_text(
            json.dumps(
                {
                    "error_code": 5,
                    "read_only_permissions": "r--r--r--",
                    "read_write_permissions": "rw-rw-rw-",
                    "timestamp_keys": ["mtime"],
                    "timestamp_divisor": 1000,
                }
            )
        )
        config = load_config(path)
        assert config.error_code == 5
        assert config.read_only_permissions == "r--r--r--"
        assert config.read_write_permissions == "rw-rw-rw-"
        assert config.timestamp_keys == ("mtime",)
        assert config.timestamp_divisor == 1000

    def test_missing_keys_keep_defaults(self, tmp_path: Path) -> None:
        """An empty object gives the default config."""
        path = tmp_path / "hostfs.json"
        path.write_text("{}")
        config = load_config(path)
        assert config.read_only_permissions == READ_ONLY_PERMISSIONS
        assert config.read_write_permissions == READ_WRITE_PERMISSIONS
        assert config.timestamp_keys == TIMESTAMP_KEYS
        assert config == AdapterConfig()

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file raises ConfigError."""
        with pytest.raises(ConfigError, match="Cannot load adapter config"):
            load_config(tmp_path / "absent.json")

    def test_malformed_json(self, tmp_path: Path) -> None:
        """Invalid JSON raises ConfigError."""
        path = tmp_path / "hostfs.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError, match="Cannot load adapter config"):
            load_config(path)

    def test_not_an_object(self, tmp_path: Path) -> None:
        """A JSON list is not a config."""
        path = tmp_path / "hostfs.json"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigError, match="JSON object"):
            load_config(path)

    def test_divisor_must_be_an_integer(self, tmp_path: Path) -> None:
        """A quoted number is rejected rather than compared as text."""
        path = tmp_path / "hostfs.json"
        path.write_text(json.dumps({"timestamp_divisor": "1000"}))
        with pytest.raises(ConfigError, match="timestamp_divisor"):
            load_config(path)

    def test_error_code_must_not_be_boolean(self, tmp_path: Path) -> None:
        """JSON true is not an error code."""
        path = tmp_path / "hostfs.json"
        path.write_text(json.dumps({"error_code": True}))
        with pytest.raises(ConfigError, match="error_code"):
            load_config(path)

    def test_permissions_must_be_strings(self, tmp_path: Path) -> None:
        """Permission strings cannot be numeric modes."""
        path = tmp_path / "hostfs.json"
        path.write_text(json.dumps({"read_only_permissions": 555}))
        with pytest.raises(ConfigError, match="read_only_permissions"):
            load_config(path)

    def test_timestamp_keys_must_be_a_list(self, tmp_path: Path) -> None:
        """A single key string is not split into characters."""
        path = tmp_path / "hostfs.json"
        path.write_text(json.dumps({"timestamp_keys": "modified"}))
        with pytest.raises(ConfigError, match="timestamp_keys"):
            load_config(path)

    def test_timestamp_keys_must_hold_strings(self, tmp_path: Path) -> None:
        """Every key in the list must be a string."""
        path = tmp_path / "hostfs.json"
        path.write_text(json.dumps({"timestamp_keys": ["modified", 3]}))
        with pytest.raises(ConfigError, match="timestamp_keys"):
            load_config(path)
