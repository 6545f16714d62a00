"""Tests for the safe-action wrapper that turns failures into results."""

import logging
from unittest.mock import MagicMock

import pytest

from browser_session.decorators import run_safely, safe_action
from browser_session.errors import ActionError, DriverError, ElementNotFound
from browser_session.result import ActionResult
from browser_session.utils import collect_diagnostics

from _utils import RecordingDriver


class FakeSession:
    def __init__(self):
        self.logger = MagicMock(spec=logging.Logger)
        self.driver = RecordingDriver()
        self.last_result = None

    @safe_action
    def poke(self, locator, error=None):
        if error is not None:
            raise error


class TestRunSafely:

    def test_success(self):
        session = FakeSession()
        result = run_safely(session, "click_link", "Login", lambda: None)
        assert result == ActionResult(ok=True, action="click_link", locator="Login")
        assert session.last_result is result
        session.logger.warning.assert_not_called()

    def test_not_found_is_folded_and_logged_once(self):
        session = FakeSession()

        def fail():
            raise ElementNotFound("Login", ["//a"])

        result = run_safely(session, "click_link", "Login", fail)
        assert not result
        assert result.error.startswith("ElementNotFound: Unable to find element for locator 'Login'")
        session.logger.warning.assert_called_once()
        assert "click_link('Login') failed" in session.logger.warning.call_args.args[0]

    def test_unexpected_exception_is_folded(self):
        session = FakeSession()

        def fail():
            raise ValueError("boom")

        result = run_safely(session, "fill_in", "Email", fail)
        assert result.to_dict() == {
            "ok": False,
            "action": "fill_in",
            "locator": "Email",
            "error": "ValueError: boom",
        }

    def test_driver_error_propagates(self):
        session = FakeSession()
        session.last_result = "previous"

        def fail():
            raise DriverError("connection refused")

        with pytest.raises(DriverError):
            run_safely(session, "click_link", "Login", fail)
        session.logger.warning.assert_not_called()
        session.logger.error.assert_called_once()
        assert session.last_result == "previous"


class TestDecorator:

    def test_returns_bool(self):
        session = FakeSession()
        assert session.poke("#a") is True
        assert session.poke("#a", error=ActionError("disabled")) is False
        assert session.last_result.action == "poke"
        assert session.last_result.error == "ActionError: disabled"

    def test_keeps_name(self):
        assert FakeSession.poke.__name__ == "poke"


class TestDiagnostics:

    def test_without_driver(self):
        text = collect_diagnostics()
        assert "Driver            : <none>" in text
        assert "Exception" not in text

    def test_with_driver_and_exception(self):
        driver = RecordingDriver()
        driver.navigate("http://app.test/x")
        text = collect_diagnostics(driver, DriverError("gone"))
        assert "Driver            : recording" in text
        assert "Current URL       : http://app.test/x" in text
        assert "Exception         : DriverError: gone" in text

    def test_closed_driver_skips_url(self):
        driver = RecordingDriver()
        driver.quit()
        text = collect_diagnostics(driver)
        assert "Driver closed     : True" in text
        assert "Current URL" not in text
