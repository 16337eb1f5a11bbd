"""
终端显示格式

ANSI 颜色、加粗和方框横幅
"""
from typing import List, Optional, Sequence
import re

from core.cards import Card, Color

# ANSI 颜色码
ANSI = {
    "red": "\x1b[31m",
    "blue": "\x1b[34m",
    "green": "\x1b[32m",
    "yellow": "\x1b[33m",
    "magenta": "\x1b[35m",
    "reset": "\x1b[0m",
    "bold": "\x1b[1m",
}

# 牌色到终端颜色 (未选色的万能牌用品红)
CARD_COLORS = {
    Color.RED: "red",
    Color.BLUE: "blue",
    Color.GREEN: "green",
    Color.YELLOW: "yellow",
    Color.WILD: "magenta",
}

CLEAR_SCREEN = "\x1b[2J\x1b[0;0H"


def colorize(text: str, color: str) -> str:
    return f"{ANSI[color]}{text}{ANSI['reset']}"


def colorize_bold(text: str, color: str) -> str:
    return f"{ANSI[color]}{ANSI['bold']}{text}{ANSI['reset']}"


def card_text(card: Card, bold: bool = False) -> str:
    """带颜色的牌文本"""
    color = CARD_COLORS[card.color]
    if bold:
        return colorize_bold(str(card), color)
    return colorize(str(card), color)


def color_text(color: Color) -> str:
    """带颜色的颜色名，如 RED"""
    return colorize(color.value.upper(), CARD_COLORS[color])


def box(text: str, padding: int = 2) -> str:
    """
    方框横幅

    ┌──────────┐
    │  text    │
    └──────────┘
    """
    width = len(text) + padding * 2
    top = "┌" + "─" * width + "┐"
    middle = "│" + " " * padding + text + " " * padding + "│"
    bottom = "└" + "─" * width + "┘"
    return colorize("\n".join([top, middle, bottom]), "blue")


def hand_lines(
    cards: Sequence[Card],
    top: Optional[Card] = None,
    is_first_turn: bool = False,
) -> List[str]:
    """
    带编号的手牌行，可出的牌加粗

    Returns:
        如 ["1: RED 5", "2: BLUE SKIP"] (含 ANSI 码)
    """
    lines = []
    for i, card in enumerate(cards):
        playable = top is not None and card.can_be_played_on(top, is_first_turn)
        lines.append(f"{i + 1}: {card_text(card, bold=playable)}")
    return lines


def strip_ansi(text: str) -> str:
    """去掉 ANSI 码 (用于日志与测试)"""
    return re.sub(r"\x1b\[[0-9;]*[A-Za-z]", "", text)
