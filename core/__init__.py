"""
Core Layer - 纯游戏逻辑 (无 I/O)

Modules:
    cards: 牌定义与牌组构成
    pile: 摸牌堆与弃牌堆
    hand: 手牌
    rules: 规则引擎
    players: 交互玩家与电脑玩家
"""
from .cards import (
    Card,
    Color,
    CardType,
    Effect,
    PLAYABLE_COLORS,
    ACTION_TYPES,
    WILD_TYPES,
    DECK_SIZE,
    build_deck,
    card_label,
    color_counts,
)

from .pile import Pile, DiscardPile

from .hand import Hand

from .rules import RuleEngine

from .players import Player, BotPlayer

__all__ = [
    # cards
    "Card",
    "Color",
    "CardType",
    "Effect",
    "PLAYABLE_COLORS",
    "ACTION_TYPES",
    "WILD_TYPES",
    "DECK_SIZE",
    "build_deck",
    "card_label",
    "color_counts",
    # pile
    "Pile",
    "DiscardPile",
    # hand
    "Hand",
    # rules
    "RuleEngine",
    # players
    "Player",
    "BotPlayer",
]
