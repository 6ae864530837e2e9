#!/usr/bin/env python3
"""
Tests for the stock host implementations.
"""

import io
import os
import sys
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest

from bftape.errors import HostIOError
from bftape.host import BufferHost, CallbackHost, Host, StreamHost
from bftape.interpreter import Interpreter
from bftape.loader import load_string
from bftape.tape import Tape


class _ClosedWriter(io.StringIO):
    def write(self, s):
        raise OSError("broken pipe")


def test_base_host_is_abstract():
    with pytest.raises(TypeError):
        Host()


def test_incomplete_host_fails_on_creation():
    class OutputOnly(Host):
        def request_output(self, value):
            pass

    with pytest.raises(TypeError):
        OutputOnly()


def test_stream_host_writes_raw_bytes():
    """High cell values reach a binary-backed stdout as single bytes."""
    raw = io.BytesIO()
    stdout = io.TextIOWrapper(raw, encoding="utf-8")
    interpreter = Interpreter(program=load_string("-." + "+" * 65 + "."),
                              host=StreamHost(io.StringIO(), stdout, io.StringIO()))
    assert interpreter.run()
    stdout.flush()
    assert raw.getvalue() == b"\xff\x40"


def test_stream_host_lines_and_output():
    stdin = io.StringIO("one\ntwo")
    stdout = io.StringIO()
    stderr = io.StringIO()
    host = StreamHost(stdin, stdout, stderr)
    assert host.request_input() == "one\n"
    assert host.request_input() == "two"
    assert host.request_input() is None
    host.request_output(ord("A"))
    host.request_debug(Tape())
    assert stdout.getvalue() == "A"
    assert stderr.getvalue() == "[ <0> ]\n"


def test_stream_host_wraps_os_errors():
    host = StreamHost(io.StringIO(), _ClosedWriter(), io.StringIO())
    with pytest.raises(HostIOError) as info:
        host.request_output(65)
    assert isinstance(info.value.cause, OSError)


def test_buffer_host():
    host = BufferHost(["a", "b"])
    assert host.request_input() == "a"
    assert host.request_input() == "b"
    assert host.request_input() is None
    host.request_output(104)
    host.request_output(255)
    assert bytes(host.output) == b"h\xff"
    assert host.text == "h\xff"


def test_callback_host_defaults():
    host = CallbackHost()
    assert host.request_input() is None
    host.request_output(1)
    host.request_debug(Tape())


def test_callback_host_false_means_failure():
    host = CallbackHost(on_input=lambda: False, on_output=lambda v: False, on_debug=lambda t: False)
    with pytest.raises(HostIOError):
        host.request_input()
    with pytest.raises(HostIOError):
        host.request_output(1)
    with pytest.raises(HostIOError):
        host.request_debug(Tape())


def test_callback_host_none_return_is_success():
    seen = []
    host = CallbackHost(on_output=lambda v: seen.append(v))
    host.request_output(7)
    assert seen == [7]
