# -*- coding: utf-8 -*-
"""
Tests for serialproc.core.config — AdminConfig and load_config.

Created
-------
2026-10-19
"""

import json
from unittest import mock

import pytest

from serialproc.core.config import AdminConfig, default_config_path, load_config


class TestAdminConfig:
    def test_defaults(self):
        cfg = AdminConfig()
        assert cfg.service_url is None
        assert cfg.api_token is None
        assert cfg.db_path is None
        assert cfg.request_timeout == 10.0
        assert cfg.max_workers == 2
        assert cfg.poll_interval_ms == 200
        assert cfg.display_timezone is None

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "config.json"
        AdminConfig(service_url="https://example.org/api", max_workers=4).save(path)

        loaded = load_config(path)
        assert loaded.service_url == "https://example.org/api"
        assert loaded.max_workers == 4
        assert loaded.request_timeout == 10.0

    def test_load_missing_file_returns_defaults(self, tmp_path):
        assert load_config(tmp_path / "nonexistent.json") == AdminConfig()

    def test_load_corrupted_file_returns_defaults(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("not json {{{")
        assert load_config(path) == AdminConfig()

    def test_load_ignores_unknown_fields(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"display_timezone": "Europe/Paris", "colour": "red"}))
        assert load_config(path).display_timezone == "Europe/Paris"

    def test_default_path_under_home(self, tmp_path):
        with mock.patch('serialproc.core.config.Path.home', return_value=tmp_path):
            assert default_config_path() == tmp_path / ".serialproc" / "config.json"
