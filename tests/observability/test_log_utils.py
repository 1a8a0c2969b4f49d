"""Tests for structured logging helpers and correlation ids."""

import asyncio
import logging
import uuid

import pytest

from studycast.core.exceptions import StorageError
from studycast.models.upload import TaskStatus
from studycast.observability.correlation import (
    CorrelationIdFilter,
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from studycast.observability.log_utils import (
    error_context,
    log_exception_with_context,
    log_with_context,
    safe_log_value,
)


class TestSafeLogValue:
    """Tests for safe_log_value rendering."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (None, "None"),
            (TaskStatus.NARRATING, "narrating"),
            (b"ID3" * 10, "bytes(30)"),
            ([1, 2, 3], "list(3 items)"),
            ({"a": 1}, "dict(1 keys)"),
            (42, "42"),
        ],
    )
    def test_renders_value(self, value, expected) -> None:
        assert safe_log_value(value) == expected

    def test_uuid_rendered_plain(self) -> None:
        value = uuid.uuid4()
        assert safe_log_value(value) == str(value)

    def test_long_string_truncated(self) -> None:
        rendered = safe_log_value("x" * 600, max_length=10)
        assert rendered.startswith("xxxxxxxxxx...")
        assert "600 total" in rendered


class TestErrorContext:
    """Tests for exception fields."""

    def test_domain_error_includes_kind_and_details(self) -> None:
        fields = error_context(StorageError("disk full", operation="create_document"))

        assert fields["error_type"] == "StorageError"
        assert fields["error_kind"] == "storage_failed"
        assert fields["detail_operation"] == "create_document"

    def test_plain_exception_has_no_kind(self) -> None:
        fields = error_context(RuntimeError("boom"))

        assert fields == {"error_type": "RuntimeError", "error_msg": "boom"}


class TestLogWithContext:
    """Tests for log record extras."""

    def test_context_lands_on_record(self, caplog) -> None:
        logger = logging.getLogger("studycast.test")
        task_id = uuid.uuid4()

        with caplog.at_level(logging.INFO, logger="studycast.test"):
            log_with_context(
                logger, logging.INFO, "stage entered", task_id=task_id, status=TaskStatus.EXTRACTING
            )

        record = caplog.records[-1]
        assert record.task_id == str(task_id)
        assert record.status == "extracting"

    def test_exception_logged_with_traceback(self, caplog) -> None:
        logger = logging.getLogger("studycast.test")
        try:
            raise ValueError("bad input")
        except ValueError as e:
            with caplog.at_level(logging.ERROR, logger="studycast.test"):
                log_exception_with_context(logger, "failed", e, task_id="t-1")

        record = caplog.records[-1]
        assert record.exc_info is not None
        assert record.error_type == "ValueError"
        assert record.task_id == "t-1"


class TestCorrelationId:
    """Tests for correlation id propagation."""

    def test_set_generates_id_when_missing(self) -> None:
        value = set_correlation_id()
        try:
            assert get_correlation_id() == value
            uuid.UUID(value)
        finally:
            clear_correlation_id()

    def test_filter_falls_back_to_dash(self) -> None:
        clear_correlation_id()
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)

        CorrelationIdFilter().filter(record)

        assert record.correlation_id == "-"

    @pytest.mark.asyncio
    async def test_task_id_does_not_leak_between_tasks(self) -> None:
        async def worker(value: str) -> str:
            set_correlation_id(value)
            await asyncio.sleep(0)
            return get_correlation_id()

        results = await asyncio.gather(worker("a"), worker("b"))

        assert results == ["a", "b"]
        assert get_correlation_id() != "a"
