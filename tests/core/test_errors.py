"""Error Hierarchy — verifies codes, HTTP statuses and the REST envelope."""

from pomodify.core.errors import (
    ConcurrencyError, DatabaseError, ErrorContext, ForbiddenError,
    InvalidTransitionError, PomodifyError, ResourceNotFoundError,
    SessionValidationError,
)


def test_invalid_transition_response():
    err = InvalidTransitionError("PAUSED", "FOCUS", "pause")
    body = err.to_response()["error"]
    assert err.http_status == 409
    assert body["code"] == "INVALID_TRANSITION"
    assert body["message"] == "Cannot pause a session in state PAUSED/FOCUS"
    assert body["context"]["command"] == "pause"
    assert body["context"]["current_status"] == "PAUSED"
    assert body["context"]["current_phase"] == "FOCUS"


def test_invalid_transition_without_phase():
    err = InvalidTransitionError("COMPLETED", None, "start")
    assert err.message == "Cannot start a session in state COMPLETED"


def test_status_codes():
    assert SessionValidationError("bad", "cycles").http_status == 400
    assert ResourceNotFoundError("Session", "x").http_status == 404
    assert ForbiddenError("Session", "x").http_status == 403
    assert ConcurrencyError("stale").http_status == 409
    assert DatabaseError("down", "execute").http_status == 503


def test_all_errors_share_base():
    for err in (
        SessionValidationError("bad", "cycles"),
        ResourceNotFoundError("Session", "x"),
        ForbiddenError("Session", "x"),
        ConcurrencyError("stale"),
    ):
        assert isinstance(err, PomodifyError)


def test_context_session_id_in_response():
    err = ConcurrencyError("stale", ErrorContext(session_id="abc"))
    assert err.to_response()["error"]["context"]["session_id"] == "abc"


def test_validation_error_reports_field():
    body = SessionValidationError("bad", "break_minutes").to_response()["error"]
    assert body["context"]["field"] == "break_minutes"
    assert body["category"] == "validation"
