"""对局配置测试"""
import json

import pytest

from engine.config import GameConfig


class TestGameConfig:
    """GameConfig 测试"""

    def test_defaults(self):
        config = GameConfig()
        assert config.hand_size == 7
        assert config.min_players == 2
        assert config.max_players == 10
        assert config.default_players == 2
        assert config.reset_token == "x"
        assert config.uno_timeout == 5.0
        assert (config.catch_timeout_min, config.catch_timeout_max) == (1, 5)
        assert config.challenge_probability == 0.5
        assert config.seed is None

    def test_from_dict_ignores_unknown(self):
        config = GameConfig.from_dict({"hand_size": 5, "seed": 3, "unknown": True})
        assert config.hand_size == 5
        assert config.seed == 3

    def test_from_json(self, tmp_path):
        path = tmp_path / "uno.json"
        path.write_text(json.dumps({"cpu_name": "BOT", "delay_scale": 0}), encoding="utf-8")
        config = GameConfig.from_json(path)
        assert config.cpu_name == "BOT"
        assert config.delay_scale == 0

    @pytest.mark.parametrize("kwargs", [
        {"min_players": 1},
        {"max_players": 1},
        {"default_players": 11},
        {"challenge_probability": 1.5},
        {"catch_timeout_min": 0},
        {"catch_timeout_min": 4, "catch_timeout_max": 2},
        {"delay_scale": -1.0},
    ])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            GameConfig(**kwargs)
