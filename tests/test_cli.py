#!/usr/bin/env python3
"""
Tests for the command-line front end.
"""

import io
import os
import sys
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest

from bftape.cli import main


def _write(tmp_path, text, name="prog.bf"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_runs_program(tmp_path, capsys):
    path = _write(tmp_path, "+++++[>++++++++++<-]>+++++.")
    assert main([path]) == 0
    assert capsys.readouterr().out == "7"


def test_inline_input(tmp_path, capsys):
    path = _write(tmp_path, ",[.,]!abc")
    assert main([path]) == 0
    assert capsys.readouterr().out == "abc"


def test_load_error_exit_code(tmp_path, capsys):
    path = _write(tmp_path, "+[")
    assert main([path]) == 1
    err = capsys.readouterr().err
    assert err.startswith("Cannot load program: LoadError: unbalanced brackets")


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "nope.bf")]) == 1
    assert "Cannot load program" in capsys.readouterr().err


def test_debug_and_show_tape(tmp_path, capsys):
    path = _write(tmp_path, "++#>+")
    assert main([path, "--debug", "--show-tape"]) == 0
    err = capsys.readouterr().err
    assert err.splitlines() == ["[ <2> ]", "[ 2 <1> ]"]


def test_on_eof_flag(tmp_path, capsys):
    path = _write(tmp_path, "+,.!")
    assert main([path, "--on-eof", "nothing"]) == 0
    assert capsys.readouterr().out == "\x01"


def test_program_from_stdin(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("++++++++[>++++++++<-]>+."))
    assert main(["-"]) == 0
    assert capsys.readouterr().out == "A"


def test_show_program(tmp_path, capsys):
    path = _write(tmp_path, "+ + comment [-]")
    assert main([path, "--show-program"]) == 0
    assert capsys.readouterr().err == "++[-]\n"


def test_bad_environment(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("BFTAPE_ON_EOF", "explode")
    path = _write(tmp_path, "+")
    assert main([path]) == 2
    assert "Invalid environment" in capsys.readouterr().err


def test_usage_error():
    with pytest.raises(SystemExit) as info:
        main([])
    assert info.value.code == 2


EXAMPLES = os.path.join(os.path.dirname(__file__), '..', 'examples')


def test_hello_example(capsys):
    assert main([os.path.join(EXAMPLES, "hello.bf")]) == 0
    assert capsys.readouterr().out == "Hello World!\n"


def test_echo_example(capsys):
    assert main([os.path.join(EXAMPLES, "echo.bf")]) == 0
    assert capsys.readouterr().out == "Hello from the inline input\n"
