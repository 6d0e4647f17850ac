"""Tests for database path and config file resolution."""

from pathlib import Path

import pytest

from snip.config import CONFIG_FILENAME, DB_FILENAME, get_config_path, load_config
from snip.errors import ConfigError


def _write_config(home: Path, text: str) -> Path:
    path = home / ".config" / "snip" / CONFIG_FILENAME
    path.parent.mkdir(parents=True)
    path.write_text(text)
    return path


class TestLoadConfig:
    def test_default_under_home(self, tmp_path):
        config = load_config(environ={"HOME": str(tmp_path)})
        assert config.db_path == tmp_path / DB_FILENAME
        assert config.ops_log is True
        assert config.config_path is None

    def test_env_override(self, tmp_path):
        config = load_config(environ={"HOME": str(tmp_path), "SNIP_DB": "/data/snip.db"})
        assert config.db_path == Path("/data/snip.db")

    def test_explicit_path_beats_env(self, tmp_path):
        config = load_config(
            tmp_path / "explicit.db",
            environ={"HOME": str(tmp_path), "SNIP_DB": "/data/snip.db"},
        )
        assert config.db_path == tmp_path / "explicit.db"

    def test_explicit_tilde_expanded(self, tmp_path):
        config = load_config("~/notes.db", environ={"HOME": str(tmp_path)})
        assert config.db_path == tmp_path / "notes.db"

    def test_memory(self):
        config = load_config(":memory:", environ={})
        assert str(config.db_path) == ":memory:"

    def test_missing_home_is_config_error(self):
        with pytest.raises(ConfigError, match="HOME"):
            load_config(environ={})

    def test_missing_home_with_override(self):
        config = load_config(environ={"SNIP_DB": "/data/snip.db"})
        assert config.db_path == Path("/data/snip.db")


class TestConfigFile:
    def test_database_path_from_file(self, tmp_path):
        config_path = _write_config(tmp_path, '[database]\npath = "~/notes/snip.sqlite3"\n')
        config = load_config(environ={"HOME": str(tmp_path)})
        assert config.db_path == tmp_path / "notes" / "snip.sqlite3"
        assert config.config_path == config_path

    def test_env_beats_file(self, tmp_path):
        _write_config(tmp_path, '[database]\npath = "/from/file.db"\n')
        config = load_config(environ={"HOME": str(tmp_path), "SNIP_DB": "/from/env.db"})
        assert config.db_path == Path("/from/env.db")

    def test_ops_log_disabled(self, tmp_path):
        _write_config(tmp_path, "[logging]\nops_log = false\n")
        config = load_config(environ={"HOME": str(tmp_path)})
        assert config.ops_log is False
        assert config.db_path == tmp_path / DB_FILENAME

    def test_snip_config_env(self, tmp_path):
        path = tmp_path / "elsewhere.toml"
        path.write_text('[database]\npath = "/custom.db"\n')
        env = {"HOME": str(tmp_path), "SNIP_CONFIG": str(path)}
        assert get_config_path(env) == (path, True)
        assert load_config(environ=env).db_path == Path("/custom.db")

    def test_snip_config_missing_file(self, tmp_path):
        env = {"HOME": str(tmp_path), "SNIP_CONFIG": str(tmp_path / "missing.toml")}
        with pytest.raises(ConfigError, match="Cannot read config"):
            load_config(environ=env)

    def test_invalid_toml(self, tmp_path):
        _write_config(tmp_path, "[database\npath = \n")
        with pytest.raises(ConfigError, match="Invalid config"):
            load_config(environ={"HOME": str(tmp_path)})

    def test_wrong_path_type(self, tmp_path):
        _write_config(tmp_path, "[database]\npath = 42\n")
        with pytest.raises(ConfigError, match="must be a string"):
            load_config(environ={"HOME": str(tmp_path)})

    def test_wrong_ops_log_type(self, tmp_path):
        _write_config(tmp_path, '[logging]\nops_log = "yes"\n')
        with pytest.raises(ConfigError, match="true or false"):
            load_config(environ={"HOME": str(tmp_path)})

    def test_section_not_a_table(self, tmp_path):
        _write_config(tmp_path, 'database = "x"\n')
        with pytest.raises(ConfigError, match="must be a table"):
            load_config(environ={"HOME": str(tmp_path)})
