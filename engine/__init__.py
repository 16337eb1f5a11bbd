"""
Engine Layer - 回合引擎与控制台

Modules:
    game: 回合引擎
    console: 控制台接口 (终端 / 脚本)
    formatting: ANSI 颜色与横幅
    config: 对局配置
    errors: 异常与控制流信号
"""
from .config import GameConfig

from .errors import RestartGame, UnoError, SetupError

from .console import Console, TerminalConsole, ScriptedConsole

from .game import (
    Game,
    ChallengeOutcome,
    ChallengeResult,
    DrawResult,
)

__all__ = [
    # config
    "GameConfig",
    # errors
    "RestartGame",
    "UnoError",
    "SetupError",
    # console
    "Console",
    "TerminalConsole",
    "ScriptedConsole",
    # game
    "Game",
    "ChallengeOutcome",
    "ChallengeResult",
    "DrawResult",
]
