"""控制台测试"""
import io
import os
import threading
import time

import pytest

from core.cards import Card, Color, CardType
from engine.console import ScriptedConsole, TerminalConsole
from engine.formatting import card_text
from engine.game import Game, CHALLENGE_PROMPT
from engine.config import GameConfig


def _blocking_pipe():
    """一对读写文本流，读端在写端关闭前阻塞"""
    r, w = os.pipe()
    return os.fdopen(r, "r"), os.fdopen(w, "w")


def _write_line(stream, text: str):
    stream.write(text + "\n")
    stream.flush()


def _wait_queued(console: TerminalConsole, n: int = 1, timeout: float = 2.0):
    """等读线程把 n 行放进队列"""
    deadline = time.monotonic() + timeout
    while console._lines.qsize() < n and time.monotonic() < deadline:
        time.sleep(0.01)
    assert console._lines.qsize() >= n


class TestScriptedConsole:
    """ScriptedConsole 测试"""

    def test_answers_in_order(self):
        console = ScriptedConsole(["a", "b"])
        assert console.ask("q1? ") == "a"
        assert console.ask_timed("q2? ", 1.0) == "b"
        assert console.questions == ["q1? ", "q2? "]
        assert console.pending == 0

    def test_exhausted_raises_eof(self):
        console = ScriptedConsole()
        with pytest.raises(EOFError):
            console.ask("q? ")

    def test_timeout_answer(self):
        console = ScriptedConsole([None])
        assert console.ask_timed("quick! ", 1.0) is None

    def test_timeout_on_untimed_question(self):
        console = ScriptedConsole([None])
        with pytest.raises(ValueError):
            console.ask("q? ")

    def test_output_is_plain_text(self):
        console = ScriptedConsole()
        console.show(card_text(Card(Color.RED, CardType.NUMBER, 5)))
        console.show("two\nlines")
        assert console.output == ["RED 5", "two", "lines"]
        assert "lines" in console.text()

    def test_feed(self):
        console = ScriptedConsole()
        console.feed("1", None)
        assert console.pending == 2


class TestTerminalConsole:
    """TerminalConsole 测试"""

    def test_ask_reads_lines(self):
        out = io.StringIO()
        console = TerminalConsole(stdin=io.StringIO("hello\nworld\n"), stdout=out)
        assert console.ask("first? ") == "hello"
        assert console.ask("second? ") == "world"
        assert "first? " in out.getvalue()

    def test_eof(self):
        console = TerminalConsole(stdin=io.StringIO(""), stdout=io.StringIO())
        with pytest.raises(EOFError):
            console.ask("q? ")
        with pytest.raises(EOFError):
            console.ask("again? ")

    def test_ask_timed_times_out(self):
        read_fd, write_fd = _blocking_pipe()
        out = io.StringIO()
        console = TerminalConsole(stdin=read_fd, stdout=out)
        assert console.ask_timed("quick! ", 0.05) is None
        assert out.getvalue().endswith("\n")
        write_fd.close()

    def test_ask_timed_answered_in_time(self):
        read_fd, write_fd = _blocking_pipe()
        console = TerminalConsole(stdin=read_fd, stdout=io.StringIO())
        _write_line(write_fd, "uno")
        assert console.ask_timed("quick! ", 2.0) == "uno"
        write_fd.close()

    def test_late_line_dropped(self):
        read_fd, write_fd = _blocking_pipe()
        console = TerminalConsole(stdin=read_fd, stdout=io.StringIO())
        assert console.ask_timed("quick! ", 0.05) is None

        _write_line(write_fd, "late")
        _wait_queued(console)
        # 下一个提示出现之后才输入的行照常作答
        threading.Timer(0.1, _write_line, args=(write_fd, "fresh")).start()
        assert console.ask("next? ") == "fresh"
        write_fd.close()

    def test_late_line_dropped_before_next_window(self):
        read_fd, write_fd = _blocking_pipe()
        console = TerminalConsole(stdin=read_fd, stdout=io.StringIO())
        assert console.ask_timed("quick! ", 0.05) is None

        _write_line(write_fd, "uno")
        _wait_queued(console)
        assert console.ask_timed("again! ", 0.1) is None
        write_fd.close()

    def test_eof_after_timeout(self):
        read_fd, write_fd = _blocking_pipe()
        console = TerminalConsole(stdin=read_fd, stdout=io.StringIO())
        assert console.ask_timed("quick! ", 0.05) is None

        _write_line(write_fd, "late")
        write_fd.close()
        _wait_queued(console, 2)
        with pytest.raises(EOFError):
            console.ask("next? ")

    def test_late_uno_does_not_answer_challenge(self):
        read_fd, write_fd = _blocking_pipe()
        console = TerminalConsole(stdin=read_fd, stdout=io.StringIO())
        game = Game(console, GameConfig(delay_scale=0.0, clear_screen=False, uno_timeout=0.05))

        assert game.ask_timed('Type "uno" within 0.05 seconds! ', 0.05) is None
        _write_line(write_fd, "uno")
        _wait_queued(console)
        threading.Timer(0.1, _write_line, args=(write_fd, "y")).start()
        assert game.ask(CHALLENGE_PROMPT) == "y"
        write_fd.close()

    def test_show(self):
        out = io.StringIO()
        TerminalConsole(stdin=io.StringIO(""), stdout=out).show("hi")
        assert out.getvalue() == "hi\n"
