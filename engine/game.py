"""
回合引擎

负责一整局 UNO: 开局设置、发牌、逐回合出牌、功能牌效果、
Wild Draw Four 质疑、UNO 喊牌窗口、摸牌与洗牌、胜负判定。

所有输入输出经由 Console，引擎本身是严格顺序执行的:
只在等待输入、节奏停顿和两个限时窗口处阻塞。
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence
import logging
import random
import time

from core.cards import Card, Color, Effect, PLAYABLE_COLORS
from core.pile import Pile, DiscardPile
from core.players import Player, BotPlayer
from core.rules import RuleEngine

from .config import GameConfig
from .console import Console
from .errors import RestartGame, SetupError
from .formatting import box, card_text, color_text, colorize, hand_lines

logger = logging.getLogger(__name__)


CARD_PROMPT = "Enter the number of the card to play (or 0 to draw): "
COLOR_PROMPT = "Enter color number (1-4): "
CHALLENGE_PROMPT = "Challenge the Wild Draw 4? (y/N): "
PLAY_DRAWN_PROMPT = "Would you like to play this card? (y/n): "
RESET_PROMPT = "Reset and start over? (y/n): "
VS_CPU_PROMPT = "Play against CPU? (Y/n): "

# Wild Draw Four 的基础罚牌数与质疑失败的额外罚牌数
WILD_DRAW_FOUR_PENALTY = 4
CHALLENGE_EXTRA_PENALTY = 2


class ChallengeOutcome(Enum):
    """Wild Draw Four 质疑结果"""
    SUCCESSFUL = "successful"
    FAILED = "failed"
    DECLINED = "declined"


@dataclass
class ChallengeResult:
    """质疑结果记录 (下一个交互回合开始时展示)"""
    outcome: ChallengeOutcome
    player: Player
    cards_drawn: int


@dataclass
class DrawResult:
    """被迫摸牌记录"""
    player: Player
    cards_drawn: int


class Game:
    """
    UNO 回合引擎

    Args:
        console: 控制台
        config: 对局配置
        rng: 随机数生成器 (洗牌、电脑质疑、抓 UNO 时限共用)

    Attributes:
        pile: 摸牌堆
        discard: 弃牌堆
        players: 按座次排列的玩家
        current_index: 当前行动玩家下标
        is_first_turn: 首张翻开的牌还没被任何人接过
        special_message: 待展示的功能牌提示
        challenge_result: 待展示的质疑结果
        draw_result: 待展示的被迫摸牌结果
        pending_draws: 非本人回合摸到、留待其下个回合展示的牌
    """

    def __init__(
        self,
        console: Console,
        config: Optional[GameConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        self.console = console
        self.config = config or GameConfig()
        self.rng = rng or random.Random(self.config.seed)
        self._reset_state()

    def _reset_state(self):
        """丢弃上一局的全部状态"""
        self.pile = Pile(rng=self.rng)
        self.discard = DiscardPile()
        self.players: List[Player] = []
        self.current_index = 0
        self.is_first_turn = True
        self.special_message: Optional[str] = None
        self.challenge_result: Optional[ChallengeResult] = None
        self.draw_result: Optional[DrawResult] = None
        self.pending_draws: Dict[Player, List[Card]] = {}
        self.vs_cpu = False
        self.turn_count = 0
        self.winner: Optional[Player] = None

    # ------------------------------------------------------------------
    # 输入输出
    # ------------------------------------------------------------------

    def _pause(self, seconds: float):
        if self.config.delay_scale > 0:
            self.console.pause(seconds * self.config.delay_scale)

    def _say(self, message: str, delay: float = 0.5):
        """输出一行并按节奏停顿"""
        self.console.show(message)
        self._pause(delay)

    def _clear(self):
        if self.config.clear_screen:
            self.console.clear()

    def _is_reset(self, answer: str) -> bool:
        return answer.strip().lower() == self.config.reset_token

    def _confirm_reset(self) -> bool:
        while True:
            answer = self.console.ask(RESET_PROMPT).strip().lower()
            if answer == "y":
                return True
            if answer == "n":
                return False

    def ask(self, question: str) -> str:
        """
        提问，处理重开指令

        Raises:
            RestartGame: 玩家确认重开
        """
        while True:
            answer = self.console.ask(question)
            if not self._is_reset(answer):
                return answer
            if self._confirm_reset():
                raise RestartGame()

    def ask_timed(self, question: str, timeout: float) -> Optional[str]:
        """
        限时提问，超时返回 None

        窗口内输入重开指令时先确认; 取消则在剩余时间内继续等待。

        Raises:
            RestartGame: 玩家确认重开
        """
        deadline = time.monotonic() + timeout
        remaining = timeout
        while True:
            answer = self.console.ask_timed(question, remaining)
            if answer is None:
                return None
            if not self._is_reset(answer):
                return answer
            if self._confirm_reset():
                raise RestartGame()
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return None

    # ------------------------------------------------------------------
    # 开局
    # ------------------------------------------------------------------

    def run(self) -> Optional[Player]:
        """
        完整会话: 开局设置 -> 对局，重开指令回到开局设置

        Returns:
            胜者
        """
        while True:
            try:
                self._reset_state()
                self.setup()
                return self.play()
            except RestartGame:
                logger.info("Game reset requested, returning to setup")

    def setup(self):
        """询问对手类型与玩家名字，然后发牌"""
        self._clear()
        self._say("\n" + box("Welcome to Uno!"))
        self._say(
            colorize(f"Tip: Type {self.config.reset_token} at any prompt to reset and start over.", "yellow"),
            0.8,
        )

        answer = self.ask(VS_CPU_PROMPT).strip().lower()
        self.vs_cpu = answer in ("", "y", "yes")

        if self.vs_cpu:
            name = self._ask_name(
                "Enter your name (or press Enter for default): ",
                default="PLAYER 1",
                taken=[self.config.cpu_name.upper()],
            )
            players: List[Player] = [Player(name), BotPlayer(self.config.cpu_name)]
        else:
            n_players = self._ask_player_count()
            names: List[str] = []
            for i in range(n_players):
                names.append(self._ask_name(
                    f"Enter name for Player {i + 1} (or press Enter for default): ",
                    default=f"PLAYER {i + 1}",
                    taken=names,
                ))
            players = [Player(name) for name in names]

        self._say("Initializing game...")
        self.start(players)

    def _ask_name(self, question: str, default: str, taken: Sequence[str]) -> str:
        while True:
            name = self.ask(question).strip().upper() or default
            if name in taken:
                self._say(colorize("Name already taken! Please choose a different name.", "red"))
                continue
            return name

    def _ask_player_count(self) -> int:
        cfg = self.config
        answer = self.ask(
            f"How many players? ({cfg.min_players}-{cfg.max_players}, "
            f"press Enter for default {cfg.default_players}): "
        ).strip()
        if not answer:
            return cfg.default_players
        try:
            n_players = int(answer)
        except ValueError:
            n_players = -1
        if cfg.min_players <= n_players <= cfg.max_players:
            return n_players
        self._say(colorize(
            f"Invalid number of players. Using default {cfg.default_players} players.", "yellow"
        ))
        return cfg.default_players

    def start(self, players: Sequence[Player]):
        """
        入座并发牌，翻开首张弃牌

        Raises:
            ValueError: 玩家少于 2 人
            SetupError: 牌堆翻不出首张牌
        """
        if len(players) < 2:
            raise ValueError("UNO needs at least two players")
        self.players = list(players)
        self.current_index = 0
        self.pile.shuffle()

        for _ in range(self.config.hand_size):
            for player in self.players:
                card = self.pile.draw()
                if card is not None:
                    player.hand.add(card)

        first = self.pile.draw()
        if first is None:
            raise SetupError("Failed to draw first card")
        self.discard.push(first)
        logger.info(
            "Dealt %d cards to %s, opening card %s",
            self.config.hand_size, [p.name for p in self.players], first,
        )
        self._say(f"First card on discard pile: {card_text(first)}")

    # ------------------------------------------------------------------
    # 座次
    # ------------------------------------------------------------------

    @property
    def current_player(self) -> Player:
        return self.players[self.current_index]

    @property
    def next_player(self) -> Player:
        return self.players[RuleEngine.next_position(self.current_index, len(self.players))]

    def next_turn(self):
        self.current_index = RuleEngine.next_position(self.current_index, len(self.players))

    def check_winner(self) -> Optional[Player]:
        """按座次返回第一个手牌为空的玩家"""
        for player in self.players:
            if len(player.hand) == 0:
                return player
        return None

    # ------------------------------------------------------------------
    # 对局
    # ------------------------------------------------------------------

    def play(self, max_turns: Optional[int] = None) -> Optional[Player]:
        """
        逐回合进行直到有人出完

        Args:
            max_turns: 回合上限 (None 表示不限)

        Returns:
            胜者，达到回合上限时为 None
        """
        while True:
            if max_turns is not None and self.turn_count >= max_turns:
                logger.warning("Stopped after %d turns without a winner", self.turn_count)
                return None

            self.play_turn()
            self.turn_count += 1

            winner = self.check_winner()
            if winner is not None:
                self.winner = winner
                logger.info("%s wins after %d turns", winner.name, self.turn_count)
                self._say("\n" + box(f"{winner.name} WINS!"))
                return winner

            self.next_turn()

    def play_turn(self):
        """当前玩家的一个回合 (不含回合结束后的轮转)"""
        player = self.current_player
        top = self.discard.top
        if top is None:
            raise SetupError("No card on discard pile")

        if player.is_automated:
            self._play_bot_turn(player, top)
            return

        self._show_turn_start(player, top)

        if not player.hand.has_playable(top, self.is_first_turn):
            self._say(colorize("No playable cards. Drawing a card...", "yellow"))
            drawn = self.draw_cards(player, 1, reveal=True)
            if drawn and drawn[0].can_be_played_on(top, self.is_first_turn):
                self.console.show("Drawn card is playable!")
                answer = self.ask(PLAY_DRAWN_PROMPT).strip().lower()
                if answer == "y":
                    self.play_card(player, len(player.hand) - 1)
                    return
                self._say(colorize("Turn ends.", "yellow"))
                return
            self._say(colorize("Cannot play drawn card. Turn ends.", "yellow"))
            return

        index = self._select_card(player, top)
        if index is None:
            self.draw_cards(player, 1, reveal=True)
            self._say("You drew a card. Your turn is over.")
            return
        self.play_card(player, index)
        self._pause(0.5)

    def _select_card(self, player: Player, top: Card) -> Optional[int]:
        """
        交互选牌，直到合法选择或要求摸牌

        Returns:
            手牌下标，None 表示摸牌
        """
        while True:
            answer = self.ask(CARD_PROMPT).strip()
            if answer == "0":
                return None
            try:
                index = int(answer) - 1
            except ValueError:
                self._say(colorize("Invalid input! Please enter a number.", "red"))
                continue

            if not 0 <= index < len(player.hand):
                self._say(colorize("Invalid card selection!", "red"))
                continue

            if not player.hand[index].can_be_played_on(top, self.is_first_turn):
                self._say(colorize(
                    "Invalid move! Card must match the color or number of the top card.", "red"
                ))
                continue

            return index

    def _show_turn_start(self, player: Player, top: Card):
        """清屏，展示累积的提示、本人摸到的牌、顶牌与手牌"""
        self._clear()

        if self.special_message:
            self.console.show(self.special_message)
            self.special_message = None

        if self.challenge_result:
            result = self.challenge_result
            self.console.show(
                f"Challenge {result.outcome.value}! {result.player.name} drew {result.cards_drawn} cards!"
            )
            self.challenge_result = None

        if self.draw_result:
            result = self.draw_result
            self.console.show(f"{result.player.name} drew {result.cards_drawn} cards!")
            self.draw_result = None

        for card in self.pending_draws.pop(player, []):
            self._say(f"You drew: {card_text(card)}")

        self.console.show(box(f"{player.name}'s turn"))
        self.console.show(f"Top card: {card_text(top)}")
        self.console.show("\nYour hand:")
        for line in hand_lines(player.hand.cards, top, self.is_first_turn):
            self._say(line, 0.1)

    def _play_bot_turn(self, bot: BotPlayer, top: Card):
        self._clear()
        self.console.show(box(f"{bot.name}'s turn"))
        self.console.show(f"Top card: {card_text(top)}")
        self.console.show(f"{bot.name} has {len(bot.hand)} cards.")

        index = bot.choose_card_to_play(top, self.is_first_turn)
        if index is not None:
            self._pause(0.4)
            self.play_card(bot, index)
            return

        self._say(f"{bot.name} has no playable cards. Drawing a card...", 0.4)
        drawn = self.draw_cards(bot, 1)
        if drawn and drawn[0].can_be_played_on(top, self.is_first_turn):
            self.play_card(bot, len(bot.hand) - 1)
            return
        self._say(f"{bot.name} ends turn.", 0.3)

    def play_card(self, player: Player, index: int):
        """
        打出一张合法牌: 进弃牌堆、触发效果、必要时打开 UNO 窗口

        Args:
            player: 出牌玩家 (当前玩家)
            index: 手牌下标
        """
        card = player.hand.remove_at(index)
        self.discard.push(card)
        self.is_first_turn = False
        logger.debug("%s played %s", player.name, card)

        if player.is_automated:
            self._say(f"{player.name} played: {card_text(card)}", 0.6)
        else:
            self._say(f"Played: {card_text(card)}")

        if card.is_special:
            self.apply_effect(card, player)

        if len(player.hand) == 1:
            self.last_card_window(player)

    # ------------------------------------------------------------------
    # 功能牌
    # ------------------------------------------------------------------

    def apply_effect(self, card: Card, player: Player):
        """
        功能牌效果

        skip / reverse / draw_two 通过多前进一步跳过下家;
        wild / wild_draw_four 在这里选色。
        """
        effect = card.get_effect()
        victim = self.next_player

        if effect == Effect.SKIP:
            self.special_message = colorize(f"{victim.name} is skipped!", "yellow")
            self.next_turn()

        elif effect == Effect.REVERSE:
            # 与 skip 同一实现
            self.special_message = colorize(
                f"Direction is reversed! {victim.name} is skipped!", "yellow"
            )
            self.next_turn()

        elif effect == Effect.DRAW_TWO:
            self._say(colorize(f"{victim.name} draws 2 cards!", "yellow"))
            self.next_turn()
            drawn = self.draw_cards(victim, 2)
            self.draw_result = DrawResult(victim, len(drawn))

        elif effect == Effect.WILD:
            self._resolve_wild(card, player)

        elif effect == Effect.WILD_DRAW_FOUR:
            self._resolve_wild(card, player)
            self.resolve_wild_draw_four_challenge(player, victim)

    def _resolve_wild(self, card: Card, player: Player):
        if player.is_automated:
            color = player.choose_color()
            self._say(f"{player.name} changed color to {color_text(color)}")
        else:
            color = self._ask_color()
            self._say(f"Color changed to {color_text(color)}")
        card.resolve_color(color)

    def _ask_color(self) -> Color:
        while True:
            self.console.show("\nChoose a color:")
            for i, color in enumerate(PLAYABLE_COLORS):
                self.console.show(f"{i + 1}: {color_text(color)}")
            answer = self.ask(COLOR_PROMPT).strip()
            try:
                index = int(answer) - 1
            except ValueError:
                index = -1
            if 0 <= index < len(PLAYABLE_COLORS):
                return PLAYABLE_COLORS[index]
            self._say(colorize("Invalid color choice!", "red"))

    def resolve_wild_draw_four_challenge(self, current: Player, victim: Player) -> ChallengeOutcome:
        """
        Wild Draw Four 质疑

        - 不质疑: 下家摸 4 张并跳过
        - 质疑成功 (出牌者手里有此前顶牌的颜色): 出牌者摸 4 张，下家照常行动
        - 质疑失败: 下家摸 6 张并跳过

        Args:
            current: 打出 Wild Draw Four 的玩家
            victim: 下家

        Returns:
            质疑结果
        """
        if victim.is_automated:
            challenge = victim.decide_challenge(self.rng, self.config.challenge_probability)
        else:
            challenge = self.ask(CHALLENGE_PROMPT).strip().lower() == "y"

        if not challenge:
            self._say(f"{victim.name} accepts the Draw 4.")
            drawn = self.draw_cards(victim, WILD_DRAW_FOUR_PENALTY)
            self.draw_result = DrawResult(victim, len(drawn))
            self.next_turn()
            logger.info("%s accepted a Wild Draw Four", victim.name)
            return ChallengeOutcome.DECLINED

        self._say(f"{victim.name} challenges the Draw 4!")

        if RuleEngine.challenge_succeeds(current.hand, self.discard.previous_top):
            drawn = self.draw_cards(current, WILD_DRAW_FOUR_PENALTY, reveal=True)
            self.challenge_result = ChallengeResult(ChallengeOutcome.SUCCESSFUL, current, len(drawn))
        else:
            penalty = WILD_DRAW_FOUR_PENALTY + CHALLENGE_EXTRA_PENALTY
            drawn = self.draw_cards(victim, penalty)
            self.challenge_result = ChallengeResult(ChallengeOutcome.FAILED, victim, len(drawn))
            self.next_turn()

        logger.info(
            "Challenge by %s %s, %s drew %d",
            victim.name, self.challenge_result.outcome.value,
            self.challenge_result.player.name, self.challenge_result.cards_drawn,
        )
        return self.challenge_result.outcome

    # ------------------------------------------------------------------
    # UNO 窗口
    # ------------------------------------------------------------------

    def last_card_window(self, player: Player) -> bool:
        """
        剩一张牌时的 UNO 窗口

        交互玩家须在时限内输入 "uno"，否则罚摸;
        电脑玩家则由交互对手在随机时限内抓，抓到罚摸。

        Returns:
            是否罚摸
        """
        penalty = self.config.uno_penalty

        if not player.is_automated:
            timeout = self.config.uno_timeout
            answer = self.ask_timed(f'Type "uno" within {timeout:g} seconds! ', timeout)
            if answer is not None and answer.strip().lower() == "uno":
                self._say(f"{player.name} says UNO!")
                return False
            self._say(f"You forgot to say UNO! Drawing {penalty} cards as penalty.")
            drawn = self.draw_cards(player, penalty, reveal=True)
            if len(drawn) < penalty:
                self._say("No cards left in deck!")
            logger.info("%s missed the UNO call", player.name)
            return True

        catcher = next((p for p in self.players if not p.is_automated), None)
        if catcher is None:
            self._say(f"{player.name} says UNO!")
            return False

        seconds = self.rng.randint(self.config.catch_timeout_min, self.config.catch_timeout_max)
        answer = self.ask_timed(
            f'Type "uno" within {seconds} seconds to catch {player.name}! ', seconds
        )
        if answer is not None and answer.strip().lower() == "uno":
            self._say(
                f"You caught {player.name} not saying UNO! {player.name} draws {penalty} cards."
            )
            self.draw_cards(player, penalty)
            self._pause(1.0)
            logger.info("%s caught %s at one card", catcher.name, player.name)
            return True

        self._say(f"Too slow. {player.name} continues.")
        self._pause(1.0)
        return False

    # ------------------------------------------------------------------
    # 摸牌与洗牌
    # ------------------------------------------------------------------

    def draw_cards(self, player: Player, count: int = 1, reveal: bool = False) -> List[Card]:
        """
        摸 count 张，牌堆空时先洗弃牌堆

        电脑玩家只报张数; 交互玩家在 reveal 为真 (本人回合) 时立即展示，
        否则暂存到其下个回合开始时展示。

        Returns:
            实际摸到的牌
        """
        drawn: List[Card] = []
        for _ in range(count):
            card = self.pile.draw()
            if card is None:
                self.reshuffle()
                card = self.pile.draw()
            if card is None:
                logger.debug("Nothing left to draw for %s", player.name)
                continue
            player.hand.add(card)
            drawn.append(card)

        if not drawn:
            return drawn

        if player.is_automated:
            plural = "card" if len(drawn) == 1 else "cards"
            self._say(f"{player.name} drew {len(drawn)} {plural}.", 0.3)
        elif reveal:
            for card in drawn:
                self._say(f"You drew: {card_text(card)}")
        else:
            self.pending_draws.setdefault(player, []).extend(drawn)
        return drawn

    def reshuffle(self) -> bool:
        """
        除顶牌外的弃牌洗回摸牌堆 (万能牌恢复无色)

        Returns:
            是否洗牌
        """
        if len(self.discard) <= 1:
            self._say("Not enough cards to reshuffle!")
            return False

        returned = self.discard.take_all_but_top()
        for card in returned:
            card.reset_color()
        self.pile.extend(returned)
        self.pile.shuffle()
        logger.info("Reshuffled %d cards into the draw pile", len(returned))
        self._say("Deck has been reshuffled!")
        return True
