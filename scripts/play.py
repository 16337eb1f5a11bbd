#!/usr/bin/env python3
"""
对战脚本

Usage:
    python scripts/play.py                      # 控制台对局 (人人 / 人机)
    python scripts/play.py --mode watch         # 观看电脑互打
    python scripts/play.py --mode arena --games 200 --output results.json
    python scripts/play.py --config uno.json --delay 0
"""
import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
import json
import random

# 添加项目根目录到路径
ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT))

from core.players import BotPlayer
from engine import Game, GameConfig, TerminalConsole
from evaluation import Arena

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="UNO console game")

    parser.add_argument(
        "--mode",
        type=str,
        default="play",
        choices=["play", "watch", "arena"],
        help="Mode: play a console game, watch CPUs play, or run a headless arena",
    )
    parser.add_argument("--config", type=str, help="JSON file with GameConfig fields")
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument("--delay", type=float, help="Pacing scale (0 disables pauses)")

    # 电脑对局参数
    parser.add_argument("--games", type=int, default=1, help="Number of games (watch/arena)")
    parser.add_argument("--players", type=int, default=2, help="CPU players per game (watch/arena)")
    parser.add_argument("--max-turns", type=int, default=2000, help="Turn cap per CPU game")
    parser.add_argument("--output", type=str, help="Output file for arena results")

    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (logs go to stderr)",
    )

    return parser.parse_args(argv)


def build_config(args) -> GameConfig:
    """配置文件 + 命令行覆盖"""
    config = GameConfig.from_json(args.config) if args.config else GameConfig()
    if args.seed is not None:
        config = replace(config, seed=args.seed)
    if args.delay is not None:
        config = replace(config, delay_scale=args.delay)
    return config


def play_game(config: GameConfig):
    """控制台对局"""
    game = Game(TerminalConsole(), config)
    winner = game.run()
    if winner is not None:
        logger.info("Winner: %s", winner.name)


def watch_game(config: GameConfig, args, console=None):
    """
    观看电脑互打

    每局的随机数种子取自同一个以 config.seed 初始化的生成器，
    同一 --seed 下整个系列可复现而各局不同。

    Returns:
        每局 (胜者名字, 回合数)，无胜者时名字为 None
    """
    config = replace(config, clear_screen=False)
    if console is None:
        console = TerminalConsole()
    rng = random.Random(config.seed)
    results = []

    for game_idx in range(args.games):
        console.show("\n" + "=" * 60)
        console.show(f"Game {game_idx + 1}/{args.games}")
        console.show("=" * 60)

        game = Game(console, config, rng=random.Random(rng.getrandbits(32)))
        game.start([BotPlayer(f"{config.cpu_name} {i + 1}") for i in range(args.players)])
        winner = game.play(max_turns=args.max_turns)

        if winner is None:
            console.show(f"No winner after {game.turn_count} turns.")
        console.show(f"Total turns: {game.turn_count}")
        results.append((winner.name if winner is not None else None, game.turn_count))

    return results


def run_arena(config: GameConfig, args):
    """无人对局统计"""
    arena = Arena(config, max_turns=args.max_turns)
    result = arena.run(n_games=args.games, n_players=args.players)
    print(result)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            json.dump(result.to_dict(), f, indent=2)
        logger.info("Results saved to %s", args.output)


def main(argv=None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        config = build_config(args)
        if args.mode == "play":
            play_game(config)
        elif args.mode == "watch":
            watch_game(config, args)
        elif args.mode == "arena":
            run_arena(config, args)
    except (EOFError, KeyboardInterrupt):
        print()
        return 0
    except Exception:
        logger.exception("Unrecoverable error")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
