"""
控制台接口

引擎只通过 Console 与外界交互:
- ask: 提问并阻塞等待一行输入
- ask_timed: 限时提问，超时返回 None
- show / clear / pause: 输出与节奏

实现:
- TerminalConsole: 真实终端，后台线程读 stdin
- ScriptedConsole: 按脚本回答并记录输出 (测试与无人对局)
"""
from typing import IO, Iterable, List, Optional
import logging
import queue
import sys
import threading
import time

from .formatting import CLEAR_SCREEN, strip_ansi

logger = logging.getLogger(__name__)


class Console:
    """控制台基类"""

    def ask(self, question: str) -> str:
        """
        提问并返回一行输入 (不含换行)

        Raises:
            EOFError: 输入已关闭
        """
        raise NotImplementedError

    def ask_timed(self, question: str, timeout: float) -> Optional[str]:
        """限时提问，超时返回 None"""
        raise NotImplementedError

    def show(self, message: str = ""):
        raise NotImplementedError

    def clear(self):
        pass

    def pause(self, seconds: float):
        pass


class TerminalConsole(Console):
    """
    终端控制台

    一个守护线程逐行读取输入放入队列。普通提问阻塞取队列，
    限时提问带超时取队列，先到者生效，不会残留计时器或监听。
    限时窗口超时后、下一次提问前到达的输入属于已关闭的窗口，直接丢弃。

    Args:
        stdin: 输入流
        stdout: 输出流
    """

    def __init__(self, stdin: Optional[IO[str]] = None, stdout: Optional[IO[str]] = None):
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout
        self._lines: "queue.Queue[Optional[str]]" = queue.Queue()
        self._reader: Optional[threading.Thread] = None
        self._closed = False
        self._window_expired = False

    def _ensure_reader(self):
        if self._reader is None:
            self._reader = threading.Thread(target=self._read_lines, name="console-reader", daemon=True)
            self._reader.start()

    def _read_lines(self):
        for line in self._stdin:
            self._lines.put(line.rstrip("\r\n"))
        # EOF
        self._lines.put(None)

    def _drop_stale_lines(self):
        """丢弃上一个限时窗口超时后才到达的输入"""
        if not self._window_expired:
            return
        self._window_expired = False
        while True:
            try:
                line = self._lines.get_nowait()
            except queue.Empty:
                return
            if line is None:
                self._lines.put(None)
                return
            logger.debug("Dropped input typed after a timed window closed: %r", line)

    def _write(self, text: str):
        self._stdout.write(text)
        self._stdout.flush()

    def _next_line(self, timeout: Optional[float] = None) -> Optional[str]:
        if self._closed:
            raise EOFError("console input closed")
        self._ensure_reader()
        line = self._lines.get(timeout=timeout)
        if line is None:
            self._closed = True
            raise EOFError("console input closed")
        return line

    def ask(self, question: str) -> str:
        self._drop_stale_lines()
        self._write(question)
        return self._next_line()

    def ask_timed(self, question: str, timeout: float) -> Optional[str]:
        self._drop_stale_lines()
        self._write(question)
        try:
            return self._next_line(timeout=max(timeout, 0.0))
        except queue.Empty:
            self._window_expired = True
            self._write("\n")
            return None

    def show(self, message: str = ""):
        self._write(message + "\n")

    def clear(self):
        self._write(CLEAR_SCREEN)

    def pause(self, seconds: float):
        if seconds > 0:
            time.sleep(seconds)


class ScriptedConsole(Console):
    """
    脚本控制台

    按顺序返回预设回答；限时提问遇到 None 视为超时。
    回答用完后再提问抛出 EOFError。

    Attributes:
        output: 所有输出 (已去除 ANSI 码)
        questions: 所有提问
    """

    def __init__(self, answers: Iterable[Optional[str]] = ()):
        self._answers: List[Optional[str]] = list(answers)
        self.output: List[str] = []
        self.questions: List[str] = []
        self.clears = 0

    def feed(self, *answers: Optional[str]):
        """追加回答"""
        self._answers.extend(answers)

    @property
    def pending(self) -> int:
        return len(self._answers)

    def _pop(self, question: str) -> Optional[str]:
        self.questions.append(strip_ansi(question))
        if not self._answers:
            raise EOFError(f"script exhausted at: {question!r}")
        return self._answers.pop(0)

    def ask(self, question: str) -> str:
        answer = self._pop(question)
        if answer is None:
            raise ValueError(f"Timeout scripted for an untimed question: {question!r}")
        return answer

    def ask_timed(self, question: str, timeout: float) -> Optional[str]:
        return self._pop(question)

    def show(self, message: str = ""):
        self.output.extend(strip_ansi(message).split("\n"))

    def clear(self):
        self.clears += 1

    def text(self) -> str:
        """全部输出拼接为一段文本"""
        return "\n".join(self.output)
