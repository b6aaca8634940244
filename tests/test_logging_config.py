"""Tests for logging configuration"""
import logging
from io import StringIO

import pytest

from worktreectl.logging_config import LevelColorFormatter, get_logger, setup_logging


class TtyStream(StringIO):
    def isatty(self):
        return True


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    git_level = logging.getLogger("git").level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("git").setLevel(git_level)


def make_record(level=logging.WARNING, message="something happened"):
    return logging.LogRecord("core", level, __file__, 1, message, None, None)


class TestLevelColorFormatter:
    """Test level name coloring."""

    def test_plain_when_not_a_terminal(self):
        formatter = LevelColorFormatter("%(levelname)s %(message)s", StringIO())
        assert formatter.format(make_record()) == "WARNING something happened"

    def test_colored_on_terminal_without_touching_record(self):
        formatter = LevelColorFormatter("%(levelname)s %(message)s", TtyStream())
        record = make_record()

        output = formatter.format(record)

        assert output.startswith("\033[33mWARNING\033[0m")
        assert record.levelname == "WARNING"


class TestSetupLogging:
    """Test handler and level setup."""

    @pytest.mark.parametrize("verbose,debug,level", [
        (False, False, logging.WARNING),
        (True, False, logging.INFO),
        (False, True, logging.DEBUG),
    ])
    def test_levels(self, verbose, debug, level):
        setup_logging(verbose=verbose, debug=debug, stream=StringIO())
        assert logging.getLogger().level == level

    def test_records_go_to_stream(self):
        stream = StringIO()
        setup_logging(verbose=True, stream=stream)

        get_logger("worktreectl.core").info("hello")

        assert stream.getvalue() == "[core] hello\n"

    def test_git_logger_quiet_unless_debugging(self):
        setup_logging(verbose=True, stream=StringIO())
        assert logging.getLogger("git").level == logging.WARNING

        setup_logging(debug=True, stream=StringIO())
        assert logging.getLogger("git").level == logging.DEBUG

    def test_replaces_existing_handlers(self):
        setup_logging(stream=StringIO())
        setup_logging(stream=StringIO())
        assert len(logging.getLogger().handlers) == 1


class TestGetLogger:
    """Test logger naming."""

    @pytest.mark.parametrize("module,expected", [
        ("worktreectl.core", "core"),
        ("worktreectl.services.git.inspector", "git.inspector"),
        ("tests", "tests"),
    ])
    def test_prefix_stripped(self, module, expected):
        assert get_logger(module).name == expected
