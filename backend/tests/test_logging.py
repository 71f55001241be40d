"""Tests for structured logging setup and request logging."""

from fastapi.testclient import TestClient
from structlog.testing import capture_logs

from admin_service.core.logging import configure_logging, get_logger


def test_reconfiguring_updates_existing_loggers(make_settings):
    module_logger = get_logger("admin_service.tests")

    configure_logging(make_settings(log_level="DEBUG"))
    with capture_logs() as first:
        module_logger.info("visible_event")

    configure_logging(make_settings(log_level="WARNING"))
    with capture_logs() as second:
        module_logger.info("hidden_event")
        module_logger.warning("warning_event")

    assert [entry["event"] for entry in first] == ["visible_event"]
    assert [entry["event"] for entry in second] == ["warning_event"]


def test_request_completed_names_calling_service(make_app):
    with TestClient(make_app()) as test_client:
        with capture_logs() as entries:
            test_client.get("/api/admin/users", headers={"X-Service-Name": "billing-service"})

    completed = [entry for entry in entries if entry["event"] == "request_completed"]
    assert len(completed) == 1
    assert completed[0]["calling_service"] == "billing-service"
    assert completed[0]["path"] == "/api/admin/users"
    assert completed[0]["status_code"] == 200
    assert completed[0]["duration_ms"] >= 0


def test_unhandled_error_is_logged_once(make_app):
    async def failing_endpoint():
        raise ValueError("bad state")

    app = make_app()
    app.add_api_route("/api/admin/fail", failing_endpoint, methods=["GET"])

    with TestClient(app) as test_client:
        with capture_logs() as entries:
            test_client.get("/api/admin/fail")

    events = [entry["event"] for entry in entries]
    assert events.count("unhandled_error") == 1
    assert "request_failed" not in events
    assert "request_completed" in events
