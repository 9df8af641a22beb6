"""Tests for tidings.errors."""
from __future__ import annotations

from tidings.errors import (
    LimitExceededError,
    ListenerError,
    SignatureMismatchError,
    TidingsError,
    WaitTimeoutError,
)


class TestHierarchy:
    def test_all_subclass_base(self) -> None:
        for cls in (LimitExceededError, ListenerError, SignatureMismatchError, WaitTimeoutError):
            assert issubclass(cls, TidingsError)

    def test_builtin_bases(self) -> None:
        assert issubclass(WaitTimeoutError, TimeoutError)
        assert issubclass(SignatureMismatchError, TypeError)

    def test_base_cause(self) -> None:
        cause = OSError("disk")
        err = TidingsError("boom", cause=cause)
        assert str(err) == "boom"
        assert err.cause is cause


class TestMessages:
    def test_limit_exceeded_keyed(self) -> None:
        err = LimitExceededError("x", 2, 3)
        assert "'x'" in str(err)
        assert "Maximum count: 2" in str(err)

    def test_wait_timeout(self) -> None:
        err = WaitTimeoutError("ready", 50)
        assert "50ms" in str(err)
        assert err.key == "ready"

    def test_listener_error_names_listener(self) -> None:
        def handler():
            pass

        err = ListenerError(handler, ValueError("bad"))
        assert "handler" in str(err)
        assert isinstance(err.cause, ValueError)
        assert err.listener is handler
