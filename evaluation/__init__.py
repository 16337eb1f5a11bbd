"""
Evaluation Layer - 电脑对局评估

Modules:
    arena: 对战竞技场
    metrics: 评估指标
"""
from .arena import (
    MatchResult,
    ArenaResult,
    Arena,
)
from .metrics import (
    GameMetrics,
    MetricsCollector,
    RunningStats,
)

__all__ = [
    # arena
    "MatchResult",
    "ArenaResult",
    "Arena",
    # metrics
    "GameMetrics",
    "MetricsCollector",
    "RunningStats",
]
