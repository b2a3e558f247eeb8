"""Tests for logging context and formatters."""

import json
import logging

from recipescaler.logging_config import (
    ContextualFormatter,
    LoggingContext,
    StructuredJsonFormatter,
    clear_context,
    recipe_ctx,
    request_id_ctx,
    set_context,
)


def _record(message: str = "scaled") -> logging.LogRecord:
    return logging.LogRecord(
        name="recipescaler.plan.scaler",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )


class TestLoggingContext:
    """Tests for the logging context manager."""

    def test_sets_and_resets(self):
        """Test that context is restored on exit."""
        with LoggingContext(request_id="abc123", recipe="Pancakes"):
            assert request_id_ctx.get() == "abc123"
            assert recipe_ctx.get() == "Pancakes"
            with LoggingContext(recipe="Crepes"):
                assert recipe_ctx.get() == "Crepes"
            assert recipe_ctx.get() == "Pancakes"

        assert request_id_ctx.get() is None
        assert recipe_ctx.get() is None

    def test_set_and_clear(self):
        """Test the module-level helpers."""
        set_context(request_id="req-1", recipe="Soup")
        assert request_id_ctx.get() == "req-1"
        clear_context()
        assert request_id_ctx.get() is None
        assert recipe_ctx.get() is None


class TestFormatters:
    """Tests for the log formatters."""

    def test_json_formatter_includes_context(self):
        """Test structured output carries the recipe being processed."""
        with LoggingContext(recipe="Pancakes"):
            data = json.loads(StructuredJsonFormatter().format(_record()))

        assert data["message"] == "scaled"
        assert data["level"] == "INFO"
        assert data["recipe"] == "Pancakes"
        assert "request_id" not in data

    def test_contextual_formatter(self):
        """Test the human-readable format."""
        with LoggingContext(request_id="0123456789abcdef", recipe="Pancakes"):
            line = ContextualFormatter().format(_record())

        assert "[req=01234567, recipe=Pancakes]" in line
        assert line.endswith("| scaled")
