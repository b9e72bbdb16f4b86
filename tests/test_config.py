# Tests for config.py: JSON load/save and defaults
# Created: 2026-10-19

import json

import pytest

from filekeep.config import ConfigError, Settings, dump_default_config


class TestDefaults:
    def test_defaults(self):
        s = Settings()
        assert s.root == "."
        assert s.listen.port == 8080
        assert s.listen.addr == ""
        assert s.hide == []
        assert s.hide_extensions == [".bak", ".DS_Store"]
        assert s.hide_dots is True
        assert s.debug is False

    def test_instances_do_not_share_lists(self):
        a, b = Settings(), Settings()
        a.hide.append("x")
        assert b.hide == []

    def test_address(self):
        s = Settings.model_validate({"listen": {"addr": "127.0.0.1", "port": 9000}})
        assert s.listen.address == "127.0.0.1:9000"
        assert s.listen.host == "127.0.0.1"
        assert Settings().listen.host == "0.0.0.0"


class TestLoad:
    def test_round_trip(self, tmp_path):
        path = tmp_path / "config.json"
        original = Settings(root="/srv", hide=["tmp"], hide_dots=False)
        original.save(path)
        assert Settings.load(path) == original

    def test_empty_root_and_zero_port_defaulted(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"root": "", "listen": {"port": 0}}))
        s = Settings.load(path)
        assert s.root == "."
        assert s.listen.port == 8080

    def test_partial_file_uses_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"hide": ["private"]}))
        s = Settings.load(path)
        assert s.hide == ["private"]
        assert s.hide_extensions == [".bak", ".DS_Store"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="couldn't read"):
            Settings.load(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError, match="couldn't parse"):
            Settings.load(path)

    def test_invalid_value(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"listen": {"port": 70000}}))
        with pytest.raises(ConfigError):
            Settings.load(path)


class TestDump:
    def test_dump_default_config(self, tmp_path):
        path = dump_default_config(tmp_path / "config.json")
        data = json.loads(path.read_text())
        assert data["listen"] == {"addr": "", "port": 8080}
        assert data["hide_dots"] is True

    def test_dump_to_unwritable_location(self, tmp_path):
        with pytest.raises(ConfigError, match="couldn't write"):
            dump_default_config(tmp_path / "missing-dir" / "config.json")


class TestVisibilityPolicy:
    def test_policy_from_settings(self):
        s = Settings(hide=["Tmp/"], hide_extensions=[".log"], hide_dots=True)
        policy = s.visibility_policy()
        assert policy.is_hidden("tmp")
        assert policy.is_hidden("a.log")
        assert policy.is_hidden(".env")
        assert not policy.is_hidden("readme.md")
