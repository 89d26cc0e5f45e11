"""Tests for pi.linenoise.terminal -- devices and raw mode."""

from __future__ import annotations

import os
import pty
import termios

import pytest

from pi.linenoise.errors import NotATTYError, UnencodableText
from pi.linenoise.terminal import (
    FileDescriptorInput,
    FileDescriptorOutput,
    is_supported_terminal,
    is_terminal,
    make_raw_attributes,
    raw_mode,
    terminal_columns,
    with_raw_mode,
)


@pytest.fixture
def pipe():
    read_fd, write_fd = os.pipe()
    yield read_fd, write_fd
    for fd in (read_fd, write_fd):
        try:
            os.close(fd)
        except OSError:
            pass


@pytest.fixture
def pty_pair():
    master, slave = pty.openpty()
    yield master, slave
    os.close(master)
    os.close(slave)


class TestSupportedTerminals:
    @pytest.mark.parametrize("term", ["", "dumb", "cons25", "emacs"])
    def test_unsupported(self, term: str) -> None:
        assert is_supported_terminal(term) is False

    @pytest.mark.parametrize("term", ["xterm", "xterm-256color", "screen", "vt100"])
    def test_supported(self, term: str) -> None:
        assert is_supported_terminal(term) is True


class TestRawAttributes:
    """Flag changes applied when entering raw mode."""

    def make_attrs(self) -> list:
        cc = [0] * 32
        return [
            termios.BRKINT | termios.ICRNL | termios.IXON | termios.IXANY,
            termios.OPOST,
            0,
            termios.ECHO | termios.ICANON | termios.ISIG | termios.IEXTEN | termios.ECHOE,
            0,
            0,
            cc,
        ]

    def test_input_flags_cleared(self) -> None:
        raw = make_raw_attributes(self.make_attrs())
        assert raw[0] & (termios.BRKINT | termios.ICRNL | termios.IXON) == 0
        # Unrelated flags are kept
        assert raw[0] & termios.IXANY

    def test_output_processing_disabled(self) -> None:
        raw = make_raw_attributes(self.make_attrs())
        assert raw[1] & termios.OPOST == 0

    def test_eight_bit_characters(self) -> None:
        raw = make_raw_attributes(self.make_attrs())
        assert raw[2] & termios.CS8 == termios.CS8

    def test_local_flags_cleared(self) -> None:
        raw = make_raw_attributes(self.make_attrs())
        assert raw[3] & (termios.ECHO | termios.ICANON | termios.ISIG | termios.IEXTEN) == 0
        assert raw[3] & termios.ECHOE

    def test_read_returns_after_one_byte(self) -> None:
        raw = make_raw_attributes(self.make_attrs())
        assert raw[6][termios.VMIN] == 1
        assert raw[6][termios.VTIME] == 0

    def test_original_is_not_modified(self) -> None:
        attrs = self.make_attrs()
        make_raw_attributes(attrs)
        assert attrs[3] & termios.ECHO
        assert attrs[6][termios.VMIN] == 0


class TestRawMode:
    """Raw mode on a pseudo-terminal is entered and always restored."""

    def test_enter_and_restore(self, pty_pair) -> None:
        _, slave = pty_pair
        original = termios.tcgetattr(slave)
        with raw_mode(slave):
            attrs = termios.tcgetattr(slave)
            assert attrs[3] & termios.ECHO == 0
            assert attrs[3] & termios.ICANON == 0
        assert termios.tcgetattr(slave) == original

    def test_restored_when_block_raises(self, pty_pair) -> None:
        _, slave = pty_pair
        original = termios.tcgetattr(slave)
        with pytest.raises(RuntimeError):
            with raw_mode(slave):
                raise RuntimeError("boom")
        assert termios.tcgetattr(slave) == original

    def test_with_raw_mode_returns_body_result(self, pty_pair) -> None:
        _, slave = pty_pair
        assert with_raw_mode(slave, lambda: 42) == 42

    def test_not_a_terminal(self, pipe) -> None:
        read_fd, _ = pipe
        assert is_terminal(read_fd) is False
        with pytest.raises(NotATTYError):
            with raw_mode(read_fd):
                pass

    def test_input_device_raw_mode(self, pty_pair) -> None:
        _, slave = pty_pair
        device = FileDescriptorInput(slave)
        assert device.is_tty is True
        with device.raw_mode():
            assert termios.tcgetattr(slave)[3] & termios.ECHO == 0


class TestFileDescriptorInput:
    def test_reads_one_byte_at_a_time(self, pipe) -> None:
        read_fd, write_fd = pipe
        os.write(write_fd, b"ab")
        os.close(write_fd)
        device = FileDescriptorInput(read_fd)
        assert device.read_byte() == ord("a")
        assert device.read_byte() == ord("b")
        assert device.read_byte() is None

    def test_poll(self, pipe) -> None:
        read_fd, write_fd = pipe
        device = FileDescriptorInput(read_fd)
        assert device.poll(0) is False
        os.write(write_fd, b"x")
        assert device.poll(0) is True

    def test_pipe_is_not_a_tty(self, pipe) -> None:
        read_fd, _ = pipe
        assert FileDescriptorInput(read_fd).is_tty is False


class TestFileDescriptorOutput:
    def test_write_encodes_text(self, pipe) -> None:
        read_fd, write_fd = pipe
        FileDescriptorOutput(write_fd).write("λ>")
        assert os.read(read_fd, 16) == "λ>".encode("utf-8")

    def test_write_single_byte_encoding(self, pipe) -> None:
        read_fd, write_fd = pipe
        FileDescriptorOutput(write_fd, "latin-1").write("é")
        assert os.read(read_fd, 16) == b"\xe9"

    def test_unencodable_text(self, pipe) -> None:
        _, write_fd = pipe
        with pytest.raises(UnencodableText):
            FileDescriptorOutput(write_fd, "latin-1").write("λ")

    def test_write_log(self, pipe, tmp_path) -> None:
        read_fd, write_fd = pipe
        log = tmp_path / "writes.log"
        output = FileDescriptorOutput(write_fd, write_log_path=str(log))
        output.write("\r> a")
        output.write("\x1b[0K")
        assert log.read_bytes() == b"\r> a\x1b[0K"
        assert os.read(read_fd, 16) == b"\r> a\x1b[0K"

    def test_pipe_has_no_width(self, pipe) -> None:
        _, write_fd = pipe
        assert terminal_columns(write_fd) is None
        assert FileDescriptorOutput(write_fd).columns is None
