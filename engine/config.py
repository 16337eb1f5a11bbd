"""
游戏配置

定义对局相关的常量和可调参数
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union
import json


@dataclass
class GameConfig:
    """
    对局配置

    Attributes:
        hand_size: 开局每人手牌数
        min_players: 最少玩家数
        max_players: 最多玩家数
        default_players: 未输入人数时的默认值
        cpu_name: 电脑玩家名字
        reset_token: 任意提示处输入即可重开
        uno_timeout: 剩一张牌时喊 UNO 的时限 (秒)
        catch_timeout_min: 抓电脑未喊 UNO 的最短时限 (秒)
        catch_timeout_max: 抓电脑未喊 UNO 的最长时限 (秒)
        challenge_probability: 电脑质疑 Wild Draw Four 的概率
        uno_penalty: 未喊 UNO 的罚牌数
        delay_scale: 输出节奏停顿的缩放 (0 表示不停顿)
        clear_screen: 每回合开始是否清屏
        seed: 随机种子
    """
    # 牌局
    hand_size: int = 7
    min_players: int = 2
    max_players: int = 10
    default_players: int = 2
    cpu_name: str = "CPU"

    # 输入
    reset_token: str = "x"

    # UNO 时限
    uno_timeout: float = 5.0
    catch_timeout_min: int = 1
    catch_timeout_max: int = 5

    # 规则
    challenge_probability: float = 0.5
    uno_penalty: int = 2

    # 输出节奏
    delay_scale: float = 1.0
    clear_screen: bool = True

    # 随机
    seed: Optional[int] = None

    def __post_init__(self):
        if self.min_players < 2 or self.max_players < self.min_players:
            raise ValueError(
                f"Invalid player limits: {self.min_players}-{self.max_players}"
            )
        if not self.min_players <= self.default_players <= self.max_players:
            raise ValueError(f"default_players out of range: {self.default_players}")
        if not 0.0 <= self.challenge_probability <= 1.0:
            raise ValueError("challenge_probability must be in [0, 1]")
        if self.catch_timeout_min < 1 or self.catch_timeout_max < self.catch_timeout_min:
            raise ValueError("Invalid catch window bounds")
        if self.delay_scale < 0:
            raise ValueError("delay_scale must be >= 0")

    @classmethod
    def from_dict(cls, d: dict) -> 'GameConfig':
        valid_keys = cls.__dataclass_fields__.keys()
        filtered = {k: v for k, v in d.items() if k in valid_keys}
        return cls(**filtered)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> 'GameConfig':
        """从 JSON 文件加载 (未知字段忽略)"""
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_dict(json.load(f))
