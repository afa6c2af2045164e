"""
Structured logger tests: singleton identity, level filtering, detail tree output.
"""

import pytest

from frameview.models.enums import LogCategory, LogLevel
from frameview.utils.logger import Logger, configure_logger, get_category_logger, get_logger


@pytest.fixture
def plain_logger():
    return Logger(min_level=LogLevel.DEBUG, use_colors=False)


@pytest.fixture(autouse=True)
def restore_singleton():
    logger = get_logger()
    level, colors = logger.min_level, logger.use_colors
    yield
    configure_logger(level, colors)


class TestSingleton:
    def test_get_logger_returns_same_instance(self):
        assert get_logger() is get_logger()

    def test_configure_logger_modifies_in_place(self):
        original = get_logger()
        configure_logger(LogLevel.DEBUG, use_colors=False)

        assert get_logger() is original
        assert original.min_level == LogLevel.DEBUG
        assert original.use_colors is False

    def test_bound_logger_follows_configuration(self, capsys):
        bound = get_category_logger(LogCategory.PROBE)
        configure_logger(LogLevel.ERROR, use_colors=False)

        bound.info("hidden")
        bound.error("shown")

        out = capsys.readouterr().out
        assert "hidden" not in out
        assert "shown" in out


class TestOutput:
    def test_line_contains_category_and_message(self, plain_logger, capsys):
        plain_logger.info(LogCategory.VIEWER, "Color selected")

        line = capsys.readouterr().out.strip()
        assert "VIEWER" in line
        assert line.endswith("Color selected")
        assert "\033[" not in line

    def test_details_rendered_as_tree(self, plain_logger, capsys):
        plain_logger.info(LogCategory.PROBE, "Probe pass complete", color="orange", available=3)

        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 3
        assert lines[1].strip() == "├─ color: orange"
        assert lines[2].strip() == "└─ available: 3"

    def test_explicit_details_come_first(self, plain_logger, capsys):
        plain_logger.log(LogCategory.CONFIG, "Loaded", details=["first"], extra="second")

        lines = capsys.readouterr().out.splitlines()
        assert lines[1].strip() == "├─ first"
        assert lines[2].strip() == "└─ extra: second"

    def test_level_filtering(self, capsys):
        logger = Logger(min_level=LogLevel.WARN, use_colors=False)
        logger.debug(LogCategory.CACHE, "debug")
        logger.info(LogCategory.CACHE, "info")
        logger.warn(LogCategory.CACHE, "warn")
        logger.error(LogCategory.CACHE, "error")

        out = capsys.readouterr().out
        assert "debug" not in out
        assert "info" not in out
        assert "warn" in out
        assert "error" in out

    def test_colors_enabled_wraps_message(self, capsys):
        Logger(min_level=LogLevel.DEBUG, use_colors=True).info(LogCategory.API, "hello")
        assert "\033[" in capsys.readouterr().out


class TestBoundLogger:
    def test_category_override(self, plain_logger, capsys):
        bound = plain_logger.for_category(LogCategory.NAVIGATION)
        bound.log("moved", category=LogCategory.RENDER)

        assert "RENDER" in capsys.readouterr().out

    def test_with_category(self, plain_logger, capsys):
        bound = plain_logger.for_category(LogCategory.NAVIGATION).with_category(LogCategory.SOCKETIO)
        bound.warn("client gone", sid="abc")

        out = capsys.readouterr().out
        assert "SOCKETIO" in out
        assert "sid: abc" in out


class TestFormatting:
    def test_exception_details_show_type(self, plain_logger, capsys):
        plain_logger.error(LogCategory.PROBE, "Frame loader raised", exception=ValueError("boom"))

        assert "exception: ValueError: boom" in capsys.readouterr().out

    def test_format_record_without_details(self, plain_logger):
        lines = plain_logger.format_record(LogCategory.CACHE, "hit", LogLevel.DEBUG)

        assert len(lines) == 1
        assert lines[0].endswith("· hit")

    def test_custom_stream(self, capsys):
        import io

        buffer = io.StringIO()
        Logger(use_colors=False, stream=buffer).info(LogCategory.SYSTEM, "to buffer")

        assert "to buffer" in buffer.getvalue()
        assert capsys.readouterr().out == ""

    def test_is_enabled_for(self):
        logger = Logger(min_level=LogLevel.INFO)

        assert not logger.is_enabled_for(LogLevel.DEBUG)
        assert logger.is_enabled_for(LogLevel.INFO)
        assert logger.is_enabled_for(LogLevel.ERROR)
