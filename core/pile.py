"""
牌堆与弃牌堆

牌堆顶为列表末尾
"""
from typing import Iterable, List, Optional, Tuple
import random

from .cards import Card, build_deck


class Pile:
    """
    摸牌堆

    Args:
        cards: 初始牌 (None 表示完整 108 张)
        rng: 随机数生成器 (用于洗牌)
    """

    def __init__(
        self,
        cards: Optional[Iterable[Card]] = None,
        rng: Optional[random.Random] = None,
    ):
        self._cards: List[Card] = list(cards) if cards is not None else build_deck()
        self._rng = rng or random.Random()

    def draw(self) -> Optional[Card]:
        """从顶部摸一张，牌堆为空返回 None"""
        if not self._cards:
            return None
        return self._cards.pop()

    def put_back(self, card: Card):
        """放回顶部"""
        self._cards.append(card)

    def extend(self, cards: Iterable[Card]):
        self._cards.extend(cards)

    def shuffle(self):
        """原地随机重排 (Fisher-Yates，每种排列等概率)"""
        self._rng.shuffle(self._cards)

    @property
    def remaining(self) -> int:
        return len(self._cards)

    @property
    def cards(self) -> Tuple[Card, ...]:
        return tuple(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __repr__(self) -> str:
        return f"Pile(remaining={len(self._cards)})"


class DiscardPile:
    """
    弃牌堆

    最后一张为顶牌，决定下一手的合法性
    """

    def __init__(self, cards: Optional[Iterable[Card]] = None):
        self._cards: List[Card] = list(cards) if cards is not None else []

    def push(self, card: Card):
        self._cards.append(card)

    @property
    def top(self) -> Optional[Card]:
        return self._cards[-1] if self._cards else None

    @property
    def previous_top(self) -> Optional[Card]:
        """顶牌下面一张 (即打出顶牌之前的顶牌)"""
        return self._cards[-2] if len(self._cards) >= 2 else None

    def take_all_but_top(self) -> List[Card]:
        """
        取走除顶牌外的所有牌

        Returns:
            被取走的牌 (原顺序)
        """
        taken = self._cards[:-1]
        self._cards = self._cards[-1:]
        return taken

    @property
    def cards(self) -> Tuple[Card, ...]:
        return tuple(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __repr__(self) -> str:
        return f"DiscardPile(size={len(self._cards)}, top={self.top})"
