"""
引擎异常

RestartGame 是控制流信号而非错误，只由 Game.run 的开局循环捕获
"""


class RestartGame(Exception):
    """玩家确认重开，从任意提示处回到开局设置"""


class UnoError(Exception):
    """引擎错误基类"""


class SetupError(UnoError):
    """开局失败 (如无法翻出首张弃牌)"""
