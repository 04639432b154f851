"""Tests for the ansi module."""

import os
from io import StringIO
from unittest.mock import Mock, patch

from chatroute import ansi
from chatroute.ansi import (
    BOLD,
    CYAN,
    DIM,
    RED,
    RESET,
    YELLOW,
    DispatchStyles,
    LogStyles,
    colorize,
    make_style,
    should_colorize,
)


def test_colorize():
    """Test colorize joins the codes and resets the style."""
    assert colorize("hello", RED) == "\x1b[31mhello\x1b[0m"
    assert colorize("hello", RED, BOLD) == "\x1b[31;1mhello\x1b[0m"
    assert colorize("hello") == "hello"


def test_make_style():
    prefix, suffix = make_style(YELLOW, DIM)
    assert prefix == "\x1b[33;2m"
    assert suffix == RESET
    assert make_style() == ("", RESET)


def test_should_colorize_respects_no_color():
    """Test that NO_COLOR wins over a TTY."""
    tty = Mock()
    tty.isatty.return_value = True
    with patch.dict(os.environ, {"NO_COLOR": "1", "FORCE_COLOR": "1"}):
        assert should_colorize(tty) is False


def test_should_colorize_respects_force_color():
    with patch.dict(os.environ, {"FORCE_COLOR": "1", "NO_COLOR": ""}):
        assert should_colorize(StringIO()) is True


def test_should_colorize_tty():
    tty = Mock()
    tty.isatty.return_value = True
    with patch.dict(os.environ, {"NO_COLOR": "", "FORCE_COLOR": ""}):
        assert should_colorize(tty) is True
        assert should_colorize(StringIO()) is False


def test_styles():
    assert LogStyles.WARNING == (YELLOW, DIM)
    assert LogStyles.CRITICAL == (RED, BOLD)
    assert DispatchStyles.HELP == (CYAN, BOLD)
    assert DispatchStyles.UNKNOWN == (RED, DIM)


def test_exported_colors_are_styled():
    """Test every exported color is used by a log or dispatch style."""
    styles = [LogStyles.WARNING, LogStyles.ERROR, LogStyles.CRITICAL, DispatchStyles.COMMAND, DispatchStyles.HELP, DispatchStyles.UNKNOWN]
    used = {code for style in styles for code in style}
    exported = [getattr(ansi, name) for name in ansi.__all__]
    colors = {value for value in exported if isinstance(value, str) and value.startswith("3")}
    assert colors == {RED, YELLOW, CYAN}
    assert colors <= used


def test_colored_dispatch_trace(router, mocker):
    """Test the colored log handler styles the trace by request kind."""
    debug = mocker.spy(router.log, "debug")
    request = Mock(through=("ping",), args=("a",))
    router.colored_log_handler("help", request)
    assert debug.call_args.args[0] == colorize("help ping('a',)", CYAN, BOLD)
    router.plain_log_handler("unknown", request)
    assert debug.call_args.args == ("%s %s%s", "unknown", "ping", ("a",))
