"""Application factory, configuration and logging setup."""

import logging

from lease_engine.app import create_app, LOG_FILE_NAME
from lease_engine.config import config, TestingConfig


def _owned_handlers():
    return [h for h in logging.getLogger().handlers if getattr(h, "_lease_engine", False)]


def test_testing_profile(app):
    assert app.config["TESTING"] is True
    assert app.config["LEASE_ACCOUNT_MAPPING"] == {"rou_asset_account_id": "1600-default"}


def test_unknown_profile_falls_back_to_default(tmp_path, monkeypatch):
    monkeypatch.setattr(config["default"], "LOG_DIR", tmp_path)
    app = create_app("staging")
    assert app.config["DEBUG"] is True


def test_log_file_written(app):
    logging.getLogger("lease_engine.test").info("hello from the test suite")
    log_file = TestingConfig.LOG_DIR / LOG_FILE_NAME
    for handler in _owned_handlers():
        handler.flush()
    assert "hello from the test suite" in log_file.read_text()


def test_repeated_create_app_does_not_stack_handlers(app):
    create_app("testing")
    create_app("testing")
    assert len(_owned_handlers()) == 2


def test_cors_headers_on_api(client):
    response = client.get("/api/health", headers={"Origin": "http://example.com"})
    assert response.headers.get("Access-Control-Allow-Origin") in ("*", "http://example.com")
