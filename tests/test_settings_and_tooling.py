import json
import logging

import pytest
from fastapi.testclient import TestClient

from src.taskmaster.generate_openapi import generate_openapi
from src.taskmaster.logging_setup import setup_logging
from src.taskmaster.main import create_app
from src.taskmaster.settings import DEFAULT_PORT, Settings, get_settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ["CORS_ALLOW_ORIGINS", "LOG_LEVEL", "LOG_FILE", "STATIC_DIR", "HOST", "PORT"]:
            monkeypatch.delenv(name, raising=False)
        settings = get_settings()
        assert settings.cors_allow_origins == ["*"]
        assert settings.log_level == "INFO"
        assert settings.log_file is None
        assert settings.static_dir is None
        assert settings.host == "127.0.0.1"
        assert settings.port == DEFAULT_PORT

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("CORS_ALLOW_ORIGINS", "http://a.test, http://b.test ,")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("LOG_FILE", "logs/app.log")
        monkeypatch.setenv("STATIC_DIR", "web")
        monkeypatch.setenv("PORT", "8080")
        settings = get_settings()
        assert settings.cors_allow_origins == ["http://a.test", "http://b.test"]
        assert settings.log_level == "DEBUG"
        assert settings.log_file == "logs/app.log"
        assert settings.static_dir == "web"
        assert settings.port == 8080

    @pytest.mark.parametrize("port", ["abc", "0", "70000"])
    def test_invalid_port_falls_back(self, monkeypatch, port):
        monkeypatch.setenv("PORT", port)
        assert get_settings().port == DEFAULT_PORT


class TestCors:
    def test_wildcard_origins_disable_credentials(self):
        client = TestClient(create_app(Settings()))
        res = client.get("/api/health", headers={"Origin": "http://any.test"})
        assert res.headers["access-control-allow-origin"] == "*"
        assert "access-control-allow-credentials" not in res.headers

    def test_explicit_origins_allow_credentials(self):
        client = TestClient(create_app(Settings(cors_allow_origins=["http://a.test"])))
        res = client.get("/api/health", headers={"Origin": "http://a.test"})
        assert res.headers["access-control-allow-origin"] == "http://a.test"
        assert res.headers["access-control-allow-credentials"] == "true"


@pytest.fixture()
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)


def test_setup_logging_writes_file(tmp_path, restore_root_logger):
    log_file = tmp_path / "logs" / "taskmaster.log"
    setup_logging(level="INFO", log_file=log_file)

    logging.getLogger("src.taskmaster.manager").info("hello from the manager")
    logging.getLogger("src.taskmaster.manager").debug("hidden at INFO")
    for h in logging.getLogger().handlers:
        h.flush()

    content = log_file.read_text(encoding="utf-8")
    assert "INFO src.taskmaster.manager: hello from the manager" in content
    assert "hidden at INFO" not in content


def test_generate_openapi(tmp_path):
    out = tmp_path / "interfaces" / "openapi.json"
    path = generate_openapi(str(out))
    assert path == str(out)

    schema = json.loads(out.read_text(encoding="utf-8"))
    assert {t["name"] for t in schema["tags"]} >= {"health", "tasks", "data"}
    assert "/api/tasks/{task_id}/complete" in schema["paths"]
    assert "/api/export/csv" in schema["paths"]
