"""
玩家

- Player: 交互玩家，决策来自控制台输入
- BotPlayer: 电脑玩家，按简单规则自动决策
"""
from typing import Optional
import random

import numpy as np

from .cards import Card, Color, PLAYABLE_COLORS, color_counts
from .hand import Hand
from .rules import RuleEngine


class Player:
    """交互玩家"""

    is_automated = False

    def __init__(self, name: str):
        self.name = name
        self.hand = Hand()

    @property
    def hand_size(self) -> int:
        return len(self.hand)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, cards={len(self.hand)})"


class BotPlayer(Player):
    """
    电脑玩家

    出牌优先级:
    1. 与顶牌点数相同的数字牌
    2. 与顶牌同色的牌
    3. 其余任意合法牌 (含功能牌、万能牌)
    """

    is_automated = True

    def __init__(self, name: str = "CPU"):
        super().__init__(name)

    def choose_card_to_play(self, top: Card, is_first_turn: bool = False) -> Optional[int]:
        """
        选择要出的牌

        Args:
            top: 弃牌堆顶牌
            is_first_turn: 是否为首回合

        Returns:
            手牌下标，无合法牌时返回 None
        """
        playable = self.hand.playable_indices(top, is_first_turn)
        if not playable:
            return None

        for i in playable:
            if RuleEngine.is_rank_match(self.hand[i], top):
                return i

        for i in playable:
            if top.color in PLAYABLE_COLORS and self.hand[i].color == top.color:
                return i

        return playable[0]

    def choose_color(self) -> Color:
        """选择手里最多的颜色，平局按 红/蓝/绿/黄 顺序"""
        counts = color_counts(self.hand)
        return PLAYABLE_COLORS[int(np.argmax(counts))]

    def decide_challenge(self, rng: random.Random, probability: float = 0.5) -> bool:
        """是否质疑 Wild Draw Four (按固定概率)"""
        return rng.random() < probability
