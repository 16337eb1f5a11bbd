"""显示格式测试"""
from core.cards import Card, Color, CardType
from engine.formatting import box, color_text, hand_lines, strip_ansi


class TestFormatting:
    """显示格式测试"""

    def test_box(self):
        lines = strip_ansi(box("Welcome to Uno!")).split("\n")
        assert lines[0] == "┌" + "─" * 19 + "┐"
        assert lines[1] == "│  Welcome to Uno!  │"
        assert lines[2] == "└" + "─" * 19 + "┘"

    def test_color_text(self):
        assert strip_ansi(color_text(Color.GREEN)) == "GREEN"
        assert color_text(Color.GREEN) != "GREEN"

    def test_hand_lines_numbering(self):
        cards = [Card(Color.RED, CardType.NUMBER, 5), Card(Color.BLUE, CardType.SKIP)]
        top = Card(Color.RED, CardType.NUMBER, 2)
        lines = hand_lines(cards, top)
        assert [strip_ansi(line) for line in lines] == ["1: RED 5", "2: BLUE SKIP"]
        # 可出的牌加粗
        assert "\x1b[1m" in lines[0]
        assert "\x1b[1m" not in lines[1]

    def test_strip_ansi(self):
        assert strip_ansi("\x1b[31mRED\x1b[0m") == "RED"
