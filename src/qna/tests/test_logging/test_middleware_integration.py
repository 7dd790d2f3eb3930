# src/qna/tests/test_logging/test_middleware_integration.py
import json
import logging
from types import SimpleNamespace

from fastapi import FastAPI
from starlette.testclient import TestClient

from qna.core.logging.builder import setup_logging
from qna.core.logging.middleware import RequestIDMiddleware, RequestTimerMiddleware


def json_lines(text: str) -> list[dict]:
    records = []
    for line in text.strip().splitlines():
        try:
            records.append(json.loads(line))
        except json.JSONDecodeError:
            continue
    return records


def make_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(RequestTimerMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/hello")
    def hello():
        logging.getLogger("qna").info("handling hello")
        return {"ok": True}

    return app


def stdout_settings(tmp_path):
    return SimpleNamespace(
        LOG_FORMAT="json",
        LOG_LEVEL="INFO",
        LOG_TO_STDOUT=True,
        LOG_DIR=tmp_path / "logs",
        LOG_MAX_BYTES=1000,
        LOG_BACKUP_COUNT=1,
        ENV="production",
        ENABLE_SQL_LOGGING=False,
    )


def test_request_id_in_response_and_logs(tmp_path, capsys):
    setup_logging(stdout_settings(tmp_path))
    client = TestClient(make_app())

    resp = client.get("/hello")
    assert resp.status_code == 200

    rid = resp.headers.get("X-Request-ID")
    assert rid is not None

    records = json_lines(capsys.readouterr().err)
    assert any(r.get("request_id") == rid and r["message"] == "handling hello" for r in records)


def test_timer_logs_one_line_per_request(tmp_path, capsys):
    setup_logging(stdout_settings(tmp_path))
    client = TestClient(make_app())

    client.get("/hello", headers={"X-Request-ID": "timer-1"})

    timings = [r for r in json_lines(capsys.readouterr().err) if r["logger"] == "qna.request_timer"]
    assert len(timings) == 1
    line = timings[0]
    assert line["message"].startswith("Request completed - Method: GET, Path: /hello")
    assert line["method"] == "GET"
    assert line["path"] == "/hello"
    assert line["status_code"] == 200
    assert line["duration_ms"] >= 0
    assert line["request_id"] == "timer-1"


def test_oversized_request_id_is_replaced():
    client = TestClient(make_app())

    resp = client.get("/hello", headers={"X-Request-ID": "x" * 500})

    assert resp.headers["X-Request-ID"] != "x" * 500


def test_timer_logs_request_that_raises(caplog):
    caplog.set_level(logging.INFO, logger="qna.request_timer")
    app = make_app()

    @app.get("/boom")
    def boom():
        raise RuntimeError("handler failed")

    client = TestClient(app, raise_server_exceptions=False)

    resp = client.get("/boom")
    assert resp.status_code == 500

    timings = [r for r in caplog.records if r.name == "qna.request_timer"]
    assert len(timings) == 1
    assert timings[0].path == "/boom"
    assert timings[0].status_code == 500
    assert timings[0].duration_ms >= 0
