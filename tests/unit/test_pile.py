"""牌堆与弃牌堆测试"""
import random
from collections import Counter

import pytest

from core.cards import Card, Color, CardType, build_deck
from core.pile import Pile, DiscardPile


def num(color: Color, rank: int) -> Card:
    return Card(color, CardType.NUMBER, rank)


class TestPile:
    """Pile 测试"""

    def test_default_full_deck(self):
        pile = Pile()
        assert len(pile) == 108
        assert pile.remaining == 108

    def test_draw_from_top(self):
        a, b = num(Color.RED, 1), num(Color.BLUE, 2)
        pile = Pile([a, b])
        assert pile.draw() is b
        assert pile.draw() is a
        assert pile.draw() is None

    def test_put_back_returns_to_top(self):
        pile = Pile([num(Color.RED, 1)])
        card = num(Color.GREEN, 9)
        pile.put_back(card)
        assert pile.draw() is card
        assert len(pile) == 1

    def test_extend(self):
        pile = Pile([])
        pile.extend([num(Color.RED, 1), num(Color.RED, 2)])
        assert pile.remaining == 2

    def test_shuffle_preserves_multiset(self):
        pile = Pile(rng=random.Random(7))
        before = Counter(c.key for c in pile.cards)
        ids_before = {id(c) for c in pile.cards}
        for _ in range(5):
            pile.shuffle()
        assert Counter(c.key for c in pile.cards) == before
        assert {id(c) for c in pile.cards} == ids_before

    def test_shuffle_changes_order(self):
        pile = Pile(rng=random.Random(1))
        before = [id(c) for c in pile.cards]
        pile.shuffle()
        assert [id(c) for c in pile.cards] != before

    def test_shuffle_deterministic_with_seed(self):
        deck = build_deck()
        p1 = Pile(deck, rng=random.Random(42))
        p2 = Pile(deck, rng=random.Random(42))
        p1.shuffle()
        p2.shuffle()
        assert [id(c) for c in p1.cards] == [id(c) for c in p2.cards]

    def test_cards_is_copy(self):
        pile = Pile([num(Color.RED, 1)])
        assert isinstance(pile.cards, tuple)
        assert len(pile) == 1


class TestDiscardPile:
    """DiscardPile 测试"""

    def test_empty(self):
        discard = DiscardPile()
        assert discard.top is None
        assert discard.previous_top is None
        assert len(discard) == 0

    def test_top_and_previous(self):
        a, b, c = num(Color.RED, 1), num(Color.BLUE, 2), num(Color.GREEN, 3)
        discard = DiscardPile([a, b])
        discard.push(c)
        assert discard.top is c
        assert discard.previous_top is b

    def test_take_all_but_top(self):
        a, b, c = num(Color.RED, 1), num(Color.BLUE, 2), num(Color.GREEN, 3)
        discard = DiscardPile([a, b, c])
        taken = discard.take_all_but_top()
        assert taken == [a, b]
        assert discard.cards == (c,)

    def test_take_from_single_card(self):
        a = num(Color.RED, 1)
        discard = DiscardPile([a])
        assert discard.take_all_but_top() == []
        assert discard.top is a
