"""
牌的定义与编码

UNO 使用 108 张牌：
- 红/蓝/绿/黄 四色，每色 0 一张，1-9 各两张
- 每色 Skip / Reverse / Draw Two 各两张
- 无色 Wild、Wild Draw Four 各四张
"""
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple
import numpy as np


class Color(Enum):
    """牌的颜色 (WILD 为万能牌选色前的占位色)"""
    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    WILD = "wild"


class CardType(Enum):
    """牌的类型"""
    NUMBER = "number"
    SKIP = "skip"
    REVERSE = "reverse"
    DRAW_TWO = "draw_two"
    WILD = "wild"
    WILD_DRAW_FOUR = "wild_draw_four"


class Effect(Enum):
    """出牌后触发的效果"""
    SKIP = "skip"
    REVERSE = "reverse"
    DRAW_TWO = "draw_two"
    WILD = "wild"
    WILD_DRAW_FOUR = "wild_draw_four"
    NONE = "none"


# 可选颜色 (固定顺序，选色平局时取靠前者)
PLAYABLE_COLORS: Tuple[Color, ...] = (Color.RED, Color.BLUE, Color.GREEN, Color.YELLOW)

# 每色两张的功能牌
ACTION_TYPES: Tuple[CardType, ...] = (CardType.SKIP, CardType.REVERSE, CardType.DRAW_TWO)

WILD_TYPES: Tuple[CardType, ...] = (CardType.WILD, CardType.WILD_DRAW_FOUR)

RANKS: Tuple[int, ...] = tuple(range(10))

# 每种万能牌的张数
WILD_COPIES = 4

DECK_SIZE = 108

_TYPE_TO_EFFECT = {
    CardType.SKIP: Effect.SKIP,
    CardType.REVERSE: Effect.REVERSE,
    CardType.DRAW_TWO: Effect.DRAW_TWO,
    CardType.WILD: Effect.WILD,
    CardType.WILD_DRAW_FOUR: Effect.WILD_DRAW_FOUR,
}


@dataclass(frozen=True, eq=False)
class Card:
    """
    单张牌

    除万能牌选色外不可变: Wild / Wild Draw Four 打出时通过 resolve_color
    把占位色 WILD 改为四种可选颜色之一，且只能改一次。
    按身份比较与哈希 (同花色同点数的两张牌是不同的牌)，按内容比较用 key。

    Attributes:
        color: 颜色
        card_type: 类型
        rank: 点数 (仅数字牌有，0-9)
    """
    color: Color
    card_type: CardType
    rank: Optional[int] = None

    def __post_init__(self):
        if self.card_type == CardType.NUMBER:
            if self.rank is None or self.rank not in RANKS:
                raise ValueError(f"Number card needs a rank in 0-9, got {self.rank!r}")
        elif self.rank is not None:
            raise ValueError(f"{self.card_type.value} card cannot have a rank")

        if self.card_type in WILD_TYPES:
            if self.color != Color.WILD:
                raise ValueError("Wild cards must be created colorless")
        elif self.color == Color.WILD:
            raise ValueError(f"{self.card_type.value} card needs a playable color")

    @property
    def is_wild(self) -> bool:
        return self.card_type in WILD_TYPES

    @property
    def is_special(self) -> bool:
        return self.card_type != CardType.NUMBER

    @property
    def is_resolved(self) -> bool:
        """万能牌是否已选色"""
        return self.is_wild and self.color != Color.WILD

    @property
    def key(self) -> Tuple[str, str, Optional[int]]:
        """用于统计/比较的元组表示 (不含身份)"""
        return (self.color.value, self.card_type.value, self.rank)

    def can_be_played_on(self, top: 'Card', is_first_turn: bool = False) -> bool:
        """
        判断本牌能否打在 top 上

        规则按顺序匹配，先命中者生效:
        1. 首回合且 top 为万能牌 -> 可出
        2. 同色 -> 可出
        3. 本牌为万能牌 -> 可出
        4. 均为数字牌 -> 点数相同才可出
        5. 均为非数字牌 -> 类型相同才可出

        Args:
            top: 弃牌堆顶牌
            is_first_turn: 是否为首回合

        Returns:
            是否合法
        """
        if is_first_turn and top.is_wild:
            return True

        if self.color == top.color:
            return True

        if self.is_wild:
            return True

        if self.card_type == CardType.NUMBER and top.card_type == CardType.NUMBER:
            return self.rank == top.rank

        if self.card_type != CardType.NUMBER and top.card_type != CardType.NUMBER:
            return self.card_type == top.card_type

        return False

    def get_effect(self) -> Effect:
        """获取出牌效果 (数字牌为 NONE)"""
        return _TYPE_TO_EFFECT.get(self.card_type, Effect.NONE)

    def resolve_color(self, color: Color):
        """
        万能牌选色

        Args:
            color: 四种可选颜色之一

        Raises:
            ValueError: 非万能牌、颜色非法或已选过色
        """
        if not self.is_wild:
            raise ValueError(f"Cannot choose a color for a {self.card_type.value} card")
        if color not in PLAYABLE_COLORS:
            raise ValueError(f"Not a playable color: {color!r}")
        if self.is_resolved:
            raise ValueError("Wild card color has already been chosen")
        object.__setattr__(self, "color", color)

    def reset_color(self):
        """万能牌洗回牌堆时恢复占位色"""
        if self.is_wild:
            object.__setattr__(self, "color", Color.WILD)

    def __str__(self) -> str:
        return card_label(self)


def card_label(card: Card) -> str:
    """
    牌的可读文本

    如 "RED 5", "BLUE DRAW TWO", "WILD", "GREEN WILD DRAW FOUR"
    """
    kind = card.card_type.value.replace("_", " ").upper()
    if card.card_type == CardType.NUMBER:
        return f"{card.color.value.upper()} {card.rank}"
    if card.is_wild and not card.is_resolved:
        return kind
    return f"{card.color.value.upper()} {kind}"


def build_deck() -> List[Card]:
    """
    构建完整 108 张牌 (未洗牌)

    Returns:
        牌列表
    """
    cards: List[Card] = []
    for color in PLAYABLE_COLORS:
        for rank in RANKS:
            copies = 1 if rank == 0 else 2
            for _ in range(copies):
                cards.append(Card(color, CardType.NUMBER, rank))
        for card_type in ACTION_TYPES:
            cards.append(Card(color, card_type))
            cards.append(Card(color, card_type))

    for _ in range(WILD_COPIES):
        cards.append(Card(Color.WILD, CardType.WILD))
        cards.append(Card(Color.WILD, CardType.WILD_DRAW_FOUR))

    return cards


def color_counts(cards: Iterable[Card]) -> np.ndarray:
    """
    统计四种可选颜色的张数

    万能牌不计入。索引顺序与 PLAYABLE_COLORS 一致。

    Args:
        cards: 牌列表

    Returns:
        (4,) int 数组
    """
    counts = np.zeros(len(PLAYABLE_COLORS), dtype=np.int64)
    for card in cards:
        if card.color in PLAYABLE_COLORS:
            counts[PLAYABLE_COLORS.index(card.color)] += 1
    return counts
