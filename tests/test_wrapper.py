"""Tests for the boundary error envelope."""
import logging

import pytest

from artanalyst.boundary import BooleanBoundaryHandler, BoundaryHandler
from artanalyst.boundary.wrapper import UNKNOWN_ERROR_MESSAGE
from artanalyst.errors import StorageError, WindowControlError

CALLER = object()


def failing(message="boom"):
    def handler(caller, *args, **kwargs):
        raise RuntimeError(message)
    return handler


def boundary_records(caplog):
    return [record.boundary for record in caplog.records if hasattr(record, "boundary")]


class TestBoundaryHandler:
    """Tests for the value-returning adapter."""

    def test_operation_name_required(self):
        with pytest.raises(ValueError):
            BoundaryHandler("", lambda caller: None)

    @pytest.mark.asyncio
    async def test_returns_sync_result(self):
        wrapped = BoundaryHandler("add", lambda caller, a, b: a + b)
        assert await wrapped(CALLER, 2, 3) == 5

    @pytest.mark.asyncio
    async def test_returns_async_result(self):
        async def handler(caller, value):
            return value.upper()

        wrapped = BoundaryHandler("upper", handler)
        assert await wrapped(CALLER, "ok") == "OK"

    @pytest.mark.asyncio
    async def test_caller_passed_through(self):
        seen = []
        wrapped = BoundaryHandler("seen", lambda caller: seen.append(caller))
        await wrapped(CALLER)
        assert seen == [CALLER]

    @pytest.mark.asyncio
    async def test_raises_tagged_error_with_original_message(self):
        """Test that failures surface as the tagged error type, chained from the cause."""
        wrapped = BoundaryHandler("getSettings", failing("disk gone"), StorageError)

        with pytest.raises(StorageError, match="disk gone") as exc_info:
            await wrapped(CALLER)

        assert exc_info.value.error_type == "StorageError"
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    @pytest.mark.asyncio
    async def test_reraises_without_error_type(self):
        wrapped = BoundaryHandler("plain", failing("raw"))
        with pytest.raises(RuntimeError, match="raw"):
            await wrapped(CALLER)

    @pytest.mark.asyncio
    async def test_empty_message_replaced(self):
        def handler(caller):
            raise RuntimeError()

        wrapped = BoundaryHandler("empty", handler, WindowControlError)
        with pytest.raises(WindowControlError, match=UNKNOWN_ERROR_MESSAGE):
            await wrapped(CALLER)

    @pytest.mark.asyncio
    async def test_failure_log_excludes_caller(self, caplog):
        """Test that the log record carries operation, error and args but not the caller."""
        caplog.set_level(logging.ERROR, logger="artanalyst")
        wrapped = BoundaryHandler("saveThing", failing("nope"), StorageError)

        with pytest.raises(StorageError):
            await wrapped(CALLER, "x", 1, flag=True)

        [record] = boundary_records(caplog)
        assert record == {
            "operation": "saveThing",
            "error": "nope",
            "args": ["x", 1],
            "kwargs": {"flag": True},
            "domain": "StorageError",
        }
        assert "Boundary handler error" in caplog.text

    @pytest.mark.asyncio
    async def test_success_not_logged(self, caplog):
        caplog.set_level(logging.DEBUG, logger="artanalyst")
        await BoundaryHandler("quiet", lambda caller: 1)(CALLER)
        assert boundary_records(caplog) == []


class TestBooleanBoundaryHandler:
    """Tests for the boolean adapter."""

    @pytest.mark.asyncio
    async def test_true_passthrough(self):
        assert await BooleanBoundaryHandler("ok", lambda caller: True)(CALLER) is True

    @pytest.mark.asyncio
    async def test_result_coerced_to_bool(self):
        assert await BooleanBoundaryHandler("falsy", lambda caller: None)(CALLER) is False

    @pytest.mark.asyncio
    async def test_failure_returns_false_and_logs(self, caplog):
        """Test that a failing persist call resolves to False instead of raising."""
        caplog.set_level(logging.ERROR, logger="artanalyst")
        wrapped = BooleanBoundaryHandler("clearHistory", failing("locked"), StorageError)

        assert await wrapped(CALLER, "arg") is False

        [record] = boundary_records(caplog)
        assert record["operation"] == "clearHistory"
        assert record["args"] == ["arg"]
        assert record["domain"] == "StorageError"
        assert "Boundary boolean handler error" in caplog.text

    @pytest.mark.asyncio
    async def test_async_failure_returns_false(self):
        async def handler(caller):
            raise OSError("read-only")

        assert await BooleanBoundaryHandler("save", handler)(CALLER) is False
