"""
规则引擎 - 合法出牌、质疑判定、轮转

所有方法都是纯函数，无状态
"""
from typing import Iterable, List, Optional, Sequence

from .cards import Card, CardType


class RuleEngine:
    """
    UNO 规则引擎

    单张牌的合法性由 Card.can_be_played_on 判定，这里负责
    手牌层面的查询与 Wild Draw Four 质疑结果
    """

    @staticmethod
    def playable_indices(
        cards: Sequence[Card],
        top: Card,
        is_first_turn: bool = False,
    ) -> List[int]:
        """
        可以打出的牌的下标

        Args:
            cards: 手牌
            top: 弃牌堆顶牌
            is_first_turn: 是否为首回合

        Returns:
            下标列表 (升序)
        """
        return [i for i, card in enumerate(cards) if card.can_be_played_on(top, is_first_turn)]

    @staticmethod
    def has_color(cards: Iterable[Card], color) -> bool:
        """手牌中是否有该颜色的非万能牌"""
        return any(not card.is_wild and card.color == color for card in cards)

    @staticmethod
    def challenge_succeeds(hand: Iterable[Card], previous_top: Optional[Card]) -> bool:
        """
        Wild Draw Four 质疑是否成功

        出牌者手里还有与此前顶牌同色的非万能牌时，质疑成功。

        Args:
            hand: 出 Wild Draw Four 一方的剩余手牌
            previous_top: Wild Draw Four 打出前的顶牌

        Returns:
            质疑是否成功
        """
        if previous_top is None:
            return False
        return RuleEngine.has_color(hand, previous_top.color)

    @staticmethod
    def next_position(current: int, n_players: int, steps: int = 1) -> int:
        """按座次前进 steps 步"""
        return (current + steps) % n_players

    @staticmethod
    def is_rank_match(card: Card, top: Card) -> bool:
        """两张数字牌点数相同"""
        return (
            card.card_type == CardType.NUMBER
            and top.card_type == CardType.NUMBER
            and card.rank == top.rank
        )
