import pytest

from emberengine import log


def test_print_message_goes_to_stdout(capsys):
    log.print_message("hello")
    captured = capsys.readouterr()
    assert captured.out == "hello\n"
    assert captured.err == ""


def test_print_warning_goes_to_stdout(capsys):
    log.print_warning("careful")
    captured = capsys.readouterr()
    assert captured.out == "careful\n"
    assert captured.err == ""


def test_print_error_goes_to_stderr(capsys):
    log.print_error("broken")
    captured = capsys.readouterr()
    assert captured.err == "broken\n"
    assert captured.out == ""


def test_print_debug_silent_by_default(capsys, monkeypatch):
    monkeypatch.delenv(log.DEBUG_ENV_VAR, raising=False)
    log.print_debug("hidden")
    assert capsys.readouterr().out == ""


@pytest.mark.parametrize("value", ["1", "yes"])
def test_print_debug_enabled(capsys, monkeypatch, value):
    monkeypatch.setenv(log.DEBUG_ENV_VAR, value)
    log.print_debug("shown")
    assert capsys.readouterr().out == "shown\n"


def test_print_debug_disabled_with_zero(capsys, monkeypatch):
    monkeypatch.setenv(log.DEBUG_ENV_VAR, "0")
    log.print_debug("hidden")
    assert capsys.readouterr().out == ""