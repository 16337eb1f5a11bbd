"""
手牌

顺序仅用于编号显示，与合法性无关
"""
from typing import Iterable, Iterator, List, Optional, Tuple

from .cards import Card
from .rules import RuleEngine


class Hand:
    """一名玩家的手牌"""

    def __init__(self, cards: Optional[Iterable[Card]] = None):
        self._cards: List[Card] = list(cards) if cards is not None else []

    def add(self, card: Card):
        """摸到的牌追加到末尾"""
        self._cards.append(card)

    def remove_at(self, index: int) -> Card:
        """
        按位置取出一张

        Args:
            index: 0 起始下标

        Raises:
            IndexError: 下标越界 (不接受负数下标)
        """
        if not 0 <= index < len(self._cards):
            raise IndexError(f"No card at position {index} (hand size {len(self._cards)})")
        return self._cards.pop(index)

    def has_playable(self, top: Card, is_first_turn: bool = False) -> bool:
        """是否有可以接 top 的牌"""
        return any(card.can_be_played_on(top, is_first_turn) for card in self._cards)

    def playable_indices(self, top: Card, is_first_turn: bool = False) -> List[int]:
        return RuleEngine.playable_indices(self._cards, top, is_first_turn)

    @property
    def cards(self) -> Tuple[Card, ...]:
        """手牌副本"""
        return tuple(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __getitem__(self, index: int) -> Card:
        return self._cards[index]

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    def __repr__(self) -> str:
        return f"Hand({', '.join(str(c) for c in self._cards)})"
