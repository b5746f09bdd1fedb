import pytest
from fastapi.testclient import TestClient
from loguru import logger

from fitcoach.core.logger import setup_logger
from fitcoach.main import create_app


@pytest.fixture(autouse=True)
def restore_logger():
    yield
    setup_logger(level="INFO")


def test_create_app_writes_to_configured_log_file(settings, upstream, tmp_path):
    log_file = tmp_path / "logs" / "proxy.log"
    client = TestClient(create_app(settings.model_copy(update={"log_file": str(log_file), "log_level": "INFO"})))

    response = client.post("/", json={"message": "hi"})
    setup_logger(level="INFO")  # closes the file sink

    assert response.status_code == 401
    content = log_file.read_text()
    assert "FastAPI application initialized" in content
    assert "no Authorization header" in content


def test_log_file_masks_bearer_tokens(tmp_path):
    log_file = tmp_path / "proxy.log"
    setup_logger(level="DEBUG", log_file=str(log_file))

    logger.warning("Auth failed for header Bearer eyJhbGciOi.secret.sig")
    setup_logger(level="INFO")

    content = log_file.read_text()
    assert "Bearer ***" in content
    assert "eyJhbGciOi" not in content


def test_without_log_file_only_stderr_is_used(settings, upstream, tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)

    create_app(settings.model_copy(update={"log_level": "INFO"}))

    assert list(tmp_path.iterdir()) == []
    assert "FastAPI application initialized" in capsys.readouterr().err


def test_level_filters_console_messages(capsys):
    setup_logger(level="WARNING")

    logger.info("hidden")
    logger.warning("shown")

    err = capsys.readouterr().err
    assert "shown" in err
    assert "hidden" not in err
