from __future__ import annotations

from pathlib import Path

import pytest

from lrcshift.config import load_config, save_config_defaults


@pytest.fixture(autouse=True)
def clean_env(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    for name in ("LRCSHIFT_INVERT", "LRCSHIFT_DROP_METADATA", "LRCSHIFT_TEMP_DIR", "LRCSHIFT_LYRICS_FIELD"):
        monkeypatch.delenv(name, raising=False)


class TestLoadConfig:
    def test_defaults(self, tmp_path):
        cfg = load_config()
        assert cfg.config_dir == tmp_path / "lrcshift"
        assert cfg.invert_offset is False
        assert cfg.drop_metadata is False
        assert cfg.lyrics_field == "LYRICS"

    def test_env_flags(self, monkeypatch):
        monkeypatch.setenv("LRCSHIFT_INVERT", "1")
        monkeypatch.setenv("LRCSHIFT_DROP_METADATA", "true")
        monkeypatch.setenv("LRCSHIFT_TEMP_DIR", "/var/tmp/lrcshift")
        cfg = load_config()
        assert cfg.invert_offset is True
        assert cfg.drop_metadata is True
        assert cfg.temp_dir == Path("/var/tmp/lrcshift")

    def test_config_file_over_env(self, tmp_path, monkeypatch):
        (tmp_path / "lrcshift").mkdir()
        (tmp_path / "lrcshift" / "config.json").write_text('{"invert_offset": false}', encoding="utf-8")
        monkeypatch.setenv("LRCSHIFT_INVERT", "1")
        assert load_config().invert_offset is False

    def test_broken_config_file_is_ignored(self, tmp_path):
        (tmp_path / "lrcshift").mkdir()
        (tmp_path / "lrcshift" / "config.json").write_text("{not json", encoding="utf-8")
        assert load_config().drop_metadata is False


def test_save_config_defaults_and_load():
    save_config_defaults(invert_offset=True)
    cfg = load_config()
    assert cfg.invert_offset is True
    assert cfg.drop_metadata is False

    save_config_defaults(drop_metadata=True)
    cfg = load_config()
    assert cfg.invert_offset is True
    assert cfg.drop_metadata is True


@pytest.mark.parametrize("content", ["[1, 2]", '"x"', "null"])
def test_non_object_config_file_is_ignored(tmp_path, monkeypatch, content):
    (tmp_path / "lrcshift").mkdir()
    (tmp_path / "lrcshift" / "config.json").write_text(content, encoding="utf-8")
    monkeypatch.setenv("LRCSHIFT_INVERT", "1")
    cfg = load_config()
    assert cfg.invert_offset is True
    assert cfg.drop_metadata is False


def test_save_config_defaults_replaces_non_object_file(tmp_path):
    (tmp_path / "lrcshift").mkdir()
    (tmp_path / "lrcshift" / "config.json").write_text("[1, 2]", encoding="utf-8")
    save_config_defaults(drop_metadata=True)
    assert load_config().drop_metadata is True
