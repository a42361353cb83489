"""Tests for key decoding."""

from __future__ import annotations

import os

import pytest

from fixture_browser.menu import KeyEvent
from fixture_browser.terminal import KeyReader, decode_keys


def keys(buf: str) -> list:
    events, _rest = decode_keys(buf)
    return [e.key for e in events]


class TestDecodeKeys:
    @pytest.mark.parametrize(
        "buf,expected",
        [
            ("\x1b[A", "up"),
            ("\x1b[B", "down"),
            ("\x1bOA", "up"),
            ("\x1bOB", "down"),
            ("\x1b[H", "home"),
            ("\x1b[F", "end"),
            ("\x1b[1~", "home"),
            ("\x1b[4~", "end"),
            ("\r", "enter"),
            ("\n", "enter"),
            ("\x03", "ctrl+c"),
            ("q", "q"),
            ("G", "G"),
        ],
    )
    def test_single_key(self, buf: str, expected: str) -> None:
        assert keys(buf) == [expected]

    def test_sequence(self) -> None:
        assert keys("j\x1b[Bk\rq") == ["j", "down", "k", "enter", "q"]

    def test_incomplete_escape_kept_for_next_read(self) -> None:
        events, rest = decode_keys("j\x1b[")
        assert events == [KeyEvent("j")]
        assert rest == "\x1b["

        events, rest = decode_keys(rest + "A")
        assert events == [KeyEvent("up")]
        assert rest == ""

    def test_unknown_csi_dropped(self) -> None:
        assert keys("\x1b[200~x") == ["x"]


class TestKeyReader:
    def test_reads_from_pipe(self) -> None:
        r, w = os.pipe()
        try:
            reader = KeyReader(r)
            assert reader.poll(0) == []
            os.write(w, b"\x1b[Bq")
            assert [e.key for e in reader.poll(0.1)] == ["down", "q"]
        finally:
            os.close(r)
            os.close(w)
