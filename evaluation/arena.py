"""
对战竞技场

电脑玩家之间的无人对局，用于观察规则与启发式的整体表现
"""
from typing import Any, Dict, List, Optional, Tuple
from dataclasses import dataclass, field, replace
import logging
import random

from core.players import BotPlayer
from engine.config import GameConfig
from engine.console import ScriptedConsole
from engine.game import Game

from .metrics import GameMetrics, MetricsCollector

logger = logging.getLogger(__name__)


@dataclass
class MatchResult:
    """对局结果"""
    seats: Tuple[str, ...]  # 按座次
    winner: Optional[str]   # 达到回合上限时为 None
    turns: int
    cards_left: Dict[str, int] = field(default_factory=dict)


@dataclass
class ArenaResult:
    """竞技场汇总结果"""
    standings: Dict[str, Dict[str, float]]
    summary: Dict[str, float]
    matches: List[MatchResult]

    @property
    def total_games(self) -> int:
        return len(self.matches)

    def get_ranking(self) -> List[Tuple[str, float]]:
        """获取排名"""
        return sorted(
            [(name, stats["win_rate"]) for name, stats in self.standings.items()],
            key=lambda x: x[1],
            reverse=True,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_games": self.total_games,
            "standings": self.standings,
            "summary": self.summary,
        }

    def __repr__(self) -> str:
        lines = [f"Arena Results ({self.total_games} games):"]
        for i, (name, win_rate) in enumerate(self.get_ranking()):
            lines.append(f"  {i+1}. {name}: {win_rate:.2%}")
        if self.summary:
            lines.append(
                f"  turns: mean {self.summary['avg_turns']:.1f}, "
                f"std {self.summary['std_turns']:.1f}, "
                f"stalemates {int(self.summary['stalemates'])}"
            )
        return "\n".join(lines)


class Arena:
    """
    对战竞技场

    每局新建 Game，座次轮换以抵消先手优势

    Args:
        config: 对局配置 (停顿会被关闭)
        max_turns: 单局回合上限
    """

    def __init__(self, config: Optional[GameConfig] = None, max_turns: int = 2000):
        base = config or GameConfig()
        self.config = replace(base, delay_scale=0.0, clear_screen=False)
        self.max_turns = max_turns
        self.rng = random.Random(self.config.seed)

    def play_match(self, n_games: int = 1, n_players: int = 2) -> List[MatchResult]:
        """
        进行对局

        Args:
            n_games: 对局数
            n_players: 每局电脑玩家数

        Returns:
            对局结果列表
        """
        if n_players < 2:
            raise ValueError("Arena games need at least two players")

        names = [f"{self.config.cpu_name} {i + 1}" for i in range(n_players)]
        results = []

        for game_idx in range(n_games):
            shift = game_idx % n_players
            seats = names[shift:] + names[:shift]

            game = Game(ScriptedConsole(), self.config, rng=random.Random(self.rng.getrandbits(32)))
            game.start([BotPlayer(name) for name in seats])
            winner = game.play(max_turns=self.max_turns)

            results.append(MatchResult(
                seats=tuple(seats),
                winner=winner.name if winner is not None else None,
                turns=game.turn_count,
                cards_left={p.name: len(p.hand) for p in game.players},
            ))
            logger.debug("Arena game %d: winner=%s turns=%d", game_idx + 1, results[-1].winner, game.turn_count)

        return results

    def run(self, n_games: int = 100, n_players: int = 2) -> ArenaResult:
        """
        运行多局并汇总

        Returns:
            汇总结果
        """
        matches = self.play_match(n_games, n_players)

        collector = MetricsCollector()
        for match in matches:
            collector.add_game(GameMetrics(
                players=list(match.seats),
                winner=match.winner,
                turns=match.turns,
                cards_left=match.cards_left,
            ))

        standings = {name: collector.compute_metrics(name) for name in collector.players}
        logger.info("Arena finished %d games", len(matches))

        return ArenaResult(
            standings=standings,
            summary=collector.compute_metrics(),
            matches=matches,
        )
