"""
Config loader and logger helper tests.
"""

import json
import logging

import pytest
from pcs.config import DEFAULT_CONFIG, load_config
from pcs.log import setup_basic_logger


class TestLoadConfig:
    def test_merges_over_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"db_path": None, "log_level": "DEBUG"}), encoding="utf-8")
        config = load_config(str(path))
        assert config["db_path"] is None
        assert config["log_level"] == "DEBUG"
        assert config["srs"] == DEFAULT_CONFIG["srs"]

    def test_does_not_mutate_base(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"secret_key": "other"}), encoding="utf-8")
        load_config(str(path))
        assert DEFAULT_CONFIG["secret_key"] == "key"

    def test_custom_base(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"b": 2}), encoding="utf-8")
        assert load_config(str(path), base={"a": 1}) == {"a": 1, "b": 2}

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "missing.json"))


class TestLogger:
    def test_string_level(self):
        logger = setup_basic_logger("pcs.test.level", "DEBUG")
        assert logger.level == logging.DEBUG

    def test_idempotent_handlers(self):
        first = setup_basic_logger("pcs.test.handlers")
        second = setup_basic_logger("pcs.test.handlers")
        assert first is second
        assert len(second.handlers) == 1
