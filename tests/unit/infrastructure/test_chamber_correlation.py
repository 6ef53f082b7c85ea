"""Unit tests for correlation ID management.

Tests the correlation ID context management and structlog processor.
"""

import asyncio
import re

import pytest

from legisvote.infrastructure.observability.correlation import (
    bind_correlation_id,
    correlation_id_processor,
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)


class TestGenerateCorrelationId:
    """Tests for generate_correlation_id function."""

    def test_generate_returns_uuid_format(self) -> None:
        uuid_pattern = re.compile(
            r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$"
        )
        assert uuid_pattern.match(generate_correlation_id()) is not None

    def test_generate_returns_unique_ids(self) -> None:
        ids = [generate_correlation_id() for _ in range(50)]
        assert len(set(ids)) == 50


class TestCorrelationIdContext:
    """Tests for correlation ID context management."""

    def test_bind_and_reset(self) -> None:
        set_correlation_id("")

        token = bind_correlation_id("request-1")
        assert get_correlation_id() == "request-1"

        reset_correlation_id(token)
        assert get_correlation_id() == ""

    def test_bind_generates_when_missing(self) -> None:
        token = bind_correlation_id(None)
        try:
            assert get_correlation_id() != ""
        finally:
            reset_correlation_id(token)

    @pytest.mark.asyncio
    async def test_context_isolation_between_tasks(self) -> None:
        results: dict[str, str] = {}

        async def task_with_id(task_name: str, correlation_id: str) -> None:
            set_correlation_id(correlation_id)
            await asyncio.sleep(0.01)
            results[task_name] = get_correlation_id()

        await asyncio.gather(
            task_with_id("task1", "id-for-task-1"),
            task_with_id("task2", "id-for-task-2"),
        )

        assert results == {"task1": "id-for-task-1", "task2": "id-for-task-2"}


class TestCorrelationIdProcessor:
    """Tests for the structlog correlation ID processor."""

    def test_processor_adds_correlation_id_when_set(self) -> None:
        token = bind_correlation_id("processor-test-id")
        try:
            result = correlation_id_processor(None, "info", {"event": "cast"})
        finally:
            reset_correlation_id(token)

        assert result == {"event": "cast", "correlation_id": "processor-test-id"}

    def test_processor_keeps_explicit_id(self) -> None:
        token = bind_correlation_id("from-context")
        try:
            result = correlation_id_processor(
                None, "info", {"event": "cast", "correlation_id": "explicit"}
            )
        finally:
            reset_correlation_id(token)

        assert result["correlation_id"] == "explicit"

    def test_processor_skips_when_no_correlation_id(self) -> None:
        set_correlation_id("")

        result = correlation_id_processor(None, "info", {"event": "cast"})

        assert "correlation_id" not in result
