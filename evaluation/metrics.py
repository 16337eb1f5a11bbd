"""
评估指标

统计电脑对局的胜率、回合数和剩余手牌
"""
from typing import Dict, Iterable, List, Optional
from dataclasses import dataclass, field
from collections import defaultdict
import numpy as np


@dataclass
class GameMetrics:
    """单局游戏指标"""
    players: List[str]
    winner: Optional[str]
    turns: int
    cards_left: Dict[str, int] = field(default_factory=dict)

    @property
    def finished(self) -> bool:
        return self.winner is not None


class MetricsCollector:
    """
    指标收集器

    收集和计算游戏指标
    """

    def __init__(self):
        self.games: List[GameMetrics] = []
        self._stats: Dict[str, Dict[str, List[float]]] = defaultdict(lambda: defaultdict(list))

    def add_game(self, metrics: GameMetrics):
        """添加游戏指标"""
        self.games.append(metrics)

        for name in metrics.players:
            self._stats[name]["games"].append(1)
            self._stats[name]["wins"].append(1 if metrics.winner == name else 0)
            self._stats[name]["cards_left"].append(metrics.cards_left.get(name, 0))

    def compute_metrics(self, player: Optional[str] = None) -> Dict[str, float]:
        """
        计算指标

        Args:
            player: 指定玩家，None 表示全局

        Returns:
            指标字典
        """
        if player is not None:
            stats = self._stats[player]
            n_games = len(stats["games"])
            if n_games == 0:
                return {}
            return {
                "games": n_games,
                "win_rate": float(np.mean(stats["wins"])),
                "avg_cards_left": float(np.mean(stats["cards_left"])),
            }

        n_games = len(self.games)
        if n_games == 0:
            return {}

        turns = RunningStats(g.turns for g in self.games)

        return {
            "total_games": n_games,
            "stalemates": sum(1 for g in self.games if not g.finished),
            "avg_turns": turns.mean,
            "std_turns": turns.std,
            "min_turns": turns.min_val,
            "max_turns": turns.max_val,
        }

    @property
    def players(self) -> List[str]:
        return list(self._stats.keys())

    def reset(self):
        """重置"""
        self.games.clear()
        self._stats.clear()


class RunningStats:
    """
    回合数等数值的在线统计 (Welford 算法)

    Attributes:
        n: 样本数
        mean: 均值
        min_val / max_val: 极值 (无样本时为 +inf / -inf)
    """

    def __init__(self, values: Iterable[float] = ()):
        self.n = 0
        self.mean = 0.0
        self._m2 = 0.0
        self.min_val = float("inf")
        self.max_val = float("-inf")
        for x in values:
            self.update(x)

    def update(self, x: float):
        self.n += 1
        delta = x - self.mean
        self.mean += delta / self.n
        self._m2 += delta * (x - self.mean)
        if x < self.min_val:
            self.min_val = x
        if x > self.max_val:
            self.max_val = x

    @property
    def variance(self) -> float:
        """样本方差 (少于两个样本时为 0)"""
        return self._m2 / (self.n - 1) if self.n > 1 else 0.0

    @property
    def std(self) -> float:
        return float(np.sqrt(self.variance))

    def to_dict(self) -> Dict[str, float]:
        empty = self.n == 0
        return {
            "count": self.n,
            "mean": self.mean,
            "std": self.std,
            "min": 0.0 if empty else self.min_val,
            "max": 0.0 if empty else self.max_val,
        }
