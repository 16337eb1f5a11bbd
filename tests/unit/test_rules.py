"""规则引擎与手牌测试"""
import pytest

from core.cards import Card, Color, CardType
from core.hand import Hand
from core.rules import RuleEngine


def num(color: Color, rank: int) -> Card:
    return Card(color, CardType.NUMBER, rank)


def wild(draw_four: bool = False) -> Card:
    return Card(Color.WILD, CardType.WILD_DRAW_FOUR if draw_four else CardType.WILD)


class TestHand:
    """Hand 测试"""

    def test_empty(self):
        hand = Hand()
        assert len(hand) == 0
        assert hand.cards == ()

    def test_add_in_order(self):
        a, b = num(Color.RED, 5), Card(Color.BLUE, CardType.SKIP)
        hand = Hand()
        hand.add(a)
        hand.add(b)
        assert hand.cards == (a, b)
        assert hand[1] is b

    def test_remove_at(self):
        a, b, c = num(Color.RED, 5), Card(Color.BLUE, CardType.SKIP), wild()
        hand = Hand([a, b, c])
        assert hand.remove_at(1) is b
        assert hand.cards == (a, c)
        assert hand.remove_at(1) is c
        assert hand.remove_at(0) is a
        assert len(hand) == 0

    def test_remove_at_invalid(self):
        hand = Hand([num(Color.RED, 5)])
        with pytest.raises(IndexError):
            hand.remove_at(1)
        with pytest.raises(IndexError):
            hand.remove_at(-1)
        assert len(hand) == 1

    def test_cards_is_copy(self):
        hand = Hand([num(Color.RED, 5)])
        cards = list(hand.cards)
        cards.append(num(Color.BLUE, 1))
        assert len(hand) == 1

    def test_has_playable(self):
        top = num(Color.RED, 7)
        assert Hand([num(Color.RED, 5)]).has_playable(top)
        assert Hand([num(Color.BLUE, 7)]).has_playable(top)
        assert Hand([wild(draw_four=True)]).has_playable(top)
        assert not Hand([num(Color.BLUE, 5), Card(Color.BLUE, CardType.SKIP)]).has_playable(top)
        assert not Hand().has_playable(top)

    def test_has_playable_first_turn(self):
        top = wild()
        hand = Hand([num(Color.BLUE, 5)])
        assert hand.has_playable(top, is_first_turn=True)
        assert not hand.has_playable(top, is_first_turn=False)

    def test_playable_indices(self):
        top = num(Color.RED, 7)
        hand = Hand([num(Color.BLUE, 1), num(Color.RED, 2), wild(), num(Color.GREEN, 7)])
        assert hand.playable_indices(top) == [1, 2, 3]


class TestChallenge:
    """Wild Draw Four 质疑判定测试"""

    def test_holding_previous_color_succeeds(self):
        previous = num(Color.BLUE, 7)
        assert RuleEngine.challenge_succeeds([num(Color.GREEN, 1), num(Color.BLUE, 9)], previous)

    def test_without_previous_color_fails(self):
        previous = num(Color.BLUE, 7)
        assert not RuleEngine.challenge_succeeds([num(Color.GREEN, 1)], previous)

    def test_wild_cards_do_not_count(self):
        previous = num(Color.BLUE, 7)
        assert not RuleEngine.challenge_succeeds([wild(), wild(draw_four=True)], previous)

    def test_resolved_wild_previous_top(self):
        previous = wild()
        previous.resolve_color(Color.YELLOW)
        assert RuleEngine.challenge_succeeds([num(Color.YELLOW, 2)], previous)

    def test_colorless_previous_top(self):
        assert not RuleEngine.challenge_succeeds([num(Color.RED, 1), wild()], wild())

    def test_no_previous_top(self):
        assert not RuleEngine.challenge_succeeds([num(Color.RED, 1)], None)


class TestRotation:
    """座次轮转测试"""

    def test_next_position(self):
        assert RuleEngine.next_position(0, 2) == 1
        assert RuleEngine.next_position(1, 2) == 0
        assert RuleEngine.next_position(2, 4, steps=2) == 0

    def test_rank_match(self):
        assert RuleEngine.is_rank_match(num(Color.RED, 3), num(Color.BLUE, 3))
        assert not RuleEngine.is_rank_match(num(Color.RED, 3), num(Color.RED, 4))
        assert not RuleEngine.is_rank_match(Card(Color.RED, CardType.SKIP), num(Color.RED, 4))
