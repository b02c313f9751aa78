# Area: Engine
"""
alias_engine._engine.session — One game session
===============================================

The Session owns the authoritative state of one chat's game: players,
teams, the word bank cursor, the active round and the finished result.

All mutations go through ``apply()``, which holds the session's own lock
for the whole action. Actions for one session are therefore applied one
at a time; actions for other sessions never touch this lock.

Every handler validates first and mutates last. A handler that raises
leaves the session exactly as it found it.
"""

from __future__ import annotations

import logging
import random
import threading
from typing import TYPE_CHECKING, Callable, Dict, List, Optional

from .enums import ActionType, FinishReason, GameLength, SessionPhase, TurnOutcome
from .notification_builder import NotificationBuilder
from .ranking import GameResult, build_game_result
from .round import Round
from .snapshot import build_session_snapshot
from .team import Player, Team
from .timer import now
from .turn import Turn
from .word_bank import WordBank, WordList
from ..errors import (
    AliasEngineError,
    CapacityViolationError,
    InvalidTransitionError,
    PlayerNotFoundError,
    SessionNotFoundError,
)

if TYPE_CHECKING:
    from ..config import EngineConfig
    from ..types import InboundAction, Notification

logger = logging.getLogger("alias_engine.session")

# Valid phase transitions: {current_phase: {allowed next phases}}
PHASE_TRANSITIONS = {
    SessionPhase.LOBBY: {SessionPhase.TEAM_FORMATION, SessionPhase.FINISHED},
    SessionPhase.TEAM_FORMATION: {
        SessionPhase.LOBBY,
        SessionPhase.IN_PROGRESS,
        SessionPhase.FINISHED,
    },
    SessionPhase.IN_PROGRESS: {SessionPhase.FINISHED},
    SessionPhase.FINISHED: set(),
}

SETUP_PHASES = (SessionPhase.LOBBY, SessionPhase.TEAM_FORMATION)


class Session:
    """
    Game state machine for one chat.

    Attributes:
        session_id: Chat/session identifier
        phase: Current SessionPhase
        players: Joined players by id, in join order
        teams: Teams in formation order (also the round rotation)
        word_bank: Draw cursor, created when the game starts
        current_round: Round collecting turns, None outside IN_PROGRESS
        completed_rounds: Rounds in which every team played
        result: Final standings once FINISHED
        closed: True once the registry tore the session down
    """

    def __init__(
        self,
        session_id: str,
        config: "EngineConfig",
        word_list: WordList,
        rng: Optional[random.Random] = None,
    ):
        self.session_id = session_id
        self.config = config
        self.word_list = word_list
        self.rng = rng or random.Random(config.shuffle_seed)

        self.phase = SessionPhase.LOBBY
        self.players: Dict[str, Player] = {}
        self.teams: List[Team] = []
        self.word_bank: Optional[WordBank] = None
        self.current_round: Optional[Round] = None
        self.completed_rounds: List[Round] = []
        self.result: Optional[GameResult] = None
        self.closed = False

        self.created_at = now()
        self.last_activity = self.created_at
        self._team_counter = 0
        self._lock = threading.RLock()
        self._builder = NotificationBuilder(session_id)
        self._handlers: Dict[ActionType, Callable[["InboundAction"], List["Notification"]]] = {
            ActionType.JOIN: self._handle_join,
            ActionType.LEAVE: self._handle_leave,
            ActionType.FORM_TEAM: self._handle_form_team,
            ActionType.START: self._handle_start,
            ActionType.NEXT_TURN: self._handle_next_turn,
            ActionType.GUESSED: self._handle_guessed,
            ActionType.SKIP: self._handle_skip,
            ActionType.END: self._handle_end,
            ActionType.STATUS: self._handle_status,
        }

    # ── Entry points ───────────────────────────────────────────

    def apply(self, action: "InboundAction") -> List["Notification"]:
        """
        Apply one action atomically.

        Returns:
            Notifications describing the committed state change

        Raises:
            AliasEngineError: If the action is rejected; state is untouched
        """
        with self._lock:
            if self.closed:
                raise SessionNotFoundError(
                    self.session_id, player_id=action.player_id, action=action.action.value
                )
            try:
                notifications = self._handlers[action.action](action)
            except AliasEngineError as exc:
                raise exc.with_context(self.session_id, action.player_id, action.action.value)
            if action.action is not ActionType.STATUS:
                self.last_activity = now()
            return notifications

    def expire_overdue_turn(self) -> List["Notification"]:
        """Close the pending turn as timed out if it ran past the max duration."""
        with self._lock:
            if self.closed or self.phase is not SessionPhase.IN_PROGRESS:
                return []
            turn = self.pending_turn
            max_ms = self.config.max_turn_ms
            if turn is None or not turn.is_overdue(max_ms):
                return []
            logger.info(f"[{self.session_id}] Turn overdue, closing as timed out")
            turn.close(TurnOutcome.TIMED_OUT, cap_ms=max_ms)
            self.last_activity = now()
            return self._after_turn_closed(turn)

    def close(self) -> None:
        """Mark the session torn down. Waits for any in-flight action."""
        with self._lock:
            if not self.closed:
                self.closed = True
                if self.current_round is not None:
                    self.current_round.discard_pending()
                logger.info(f"[{self.session_id}] Session closed")

    def idle_seconds(self) -> float:
        with self._lock:
            return now() - self.last_activity

    def snapshot(self, reveal_secret: bool = False) -> dict:
        with self._lock:
            return build_session_snapshot(self, reveal_secret=reveal_secret)

    # ── Derived state ──────────────────────────────────────────

    @property
    def finished(self) -> bool:
        return self.phase is SessionPhase.FINISHED

    @property
    def pending_turn(self) -> Optional[Turn]:
        if self.current_round is None:
            return None
        return self.current_round.current_turn

    def team_of(self, player_id: str) -> Optional[Team]:
        for team in self.teams:
            if team.has_member(player_id):
                return team
        return None

    def unpaired_players(self) -> List[Player]:
        return [p for pid, p in self.players.items() if self.team_of(pid) is None]

    # ── Phase helpers ──────────────────────────────────────────

    def _advance_phase(self, new_phase: SessionPhase) -> None:
        if new_phase not in PHASE_TRANSITIONS[self.phase]:
            raise RuntimeError(
                f"Invalid phase transition: {self.phase.value} -> {new_phase.value}"
            )
        logger.info(f"[{self.session_id}] Phase: {self.phase.value} → {new_phase.value}")
        self.phase = new_phase

    def _require_phase(self, action: str, *phases: SessionPhase) -> None:
        if self.phase not in phases:
            raise InvalidTransitionError(
                f"Cannot {action} while the session is {self.phase.value}"
            )

    def _require_player(self, player_id: str) -> Player:
        player = self.players.get(player_id)
        if player is None:
            raise PlayerNotFoundError(player_id)
        return player

    # ── Setup handlers ─────────────────────────────────────────

    def _handle_join(self, action: "InboundAction") -> List["Notification"]:
        if self.phase is SessionPhase.IN_PROGRESS:
            raise InvalidTransitionError(
                "Game in progress; teams cannot change until it ends"
            )
        self._require_phase("join", *SETUP_PHASES)
        if action.player_id in self.players:
            raise CapacityViolationError(f"Player '{action.player_id}' already joined")
        max_players = self.config.max_players
        if max_players is not None and len(self.players) >= max_players:
            raise CapacityViolationError(f"Session is full ({max_players} players)")

        player = Player(
            player_id=action.player_id,
            display_name=action.display_name or action.player_id,
        )
        self.players[player.player_id] = player
        logger.info(f"[{self.session_id}] {player.player_id} joined ({len(self.players)} players)")
        return [self._builder.player_joined(player, list(self.players.values()))]

    def _handle_leave(self, action: "InboundAction") -> List["Notification"]:
        if self.phase is SessionPhase.IN_PROGRESS:
            raise InvalidTransitionError(
                "Game in progress; end the game before leaving"
            )
        self._require_phase("leave", *SETUP_PHASES)
        player = self._require_player(action.player_id)

        team = self.team_of(player.player_id)
        if team is not None:
            self.teams.remove(team)
            logger.info(f"[{self.session_id}] {team.team_id} dissolved")
        del self.players[player.player_id]
        if self.phase is SessionPhase.TEAM_FORMATION and not self.teams:
            self._advance_phase(SessionPhase.LOBBY)

        return [self._builder.player_left(
            player, team.team_id if team else None, self.phase.value
        )]

    def _handle_form_team(self, action: "InboundAction") -> List["Notification"]:
        self._require_phase("form a team", *SETUP_PHASES)
        actor = self._require_player(action.player_id)
        partner_id = action.partner_id
        if partner_id == actor.player_id:
            raise CapacityViolationError("A team needs two different players")
        partner = self._require_player(partner_id)
        for player in (actor, partner):
            existing = self.team_of(player.player_id)
            if existing is not None:
                raise CapacityViolationError(
                    f"Player '{player.player_id}' is already in {existing.team_id}"
                )
        if self.config.max_teams is not None and len(self.teams) >= self.config.max_teams:
            raise CapacityViolationError(f"Team limit reached ({self.config.max_teams})")

        self._team_counter += 1
        team = Team(team_id=f"team-{self._team_counter}", members=(actor, partner))
        self.teams.append(team)
        if self.phase is SessionPhase.LOBBY:
            self._advance_phase(SessionPhase.TEAM_FORMATION)
        logger.info(f"[{self.session_id}] {team.team_id} formed: {actor.player_id} + {partner.player_id}")
        return [self._builder.team_formed(team, list(self.teams))]

    def _handle_start(self, action: "InboundAction") -> List["Notification"]:
        if self.phase is SessionPhase.LOBBY and not self.players:
            # Opening an empty lobby; nothing to mutate
            return [self._builder.session_opened(action.player_id)]
        self._require_phase("start", *SETUP_PHASES)
        self._require_player(action.player_id)
        unpaired = self.unpaired_players()
        if unpaired:
            names = ", ".join(p.player_id for p in unpaired)
            raise CapacityViolationError(f"Every player needs a partner; unpaired: {names}")
        if len(self.teams) < self.config.min_teams:
            raise CapacityViolationError(
                f"At least {self.config.min_teams} team(s) required, have {len(self.teams)}"
            )

        self.word_bank = WordBank.shuffled(
            self.word_list, self.rng, self.config.complexity_weights
        )
        self._advance_phase(SessionPhase.IN_PROGRESS)
        self.current_round = Round(1, self.teams)
        return [self._builder.game_started(self.current_round, self.current_round.next_team())]

    # ── Turn handlers ──────────────────────────────────────────

    def _handle_next_turn(self, action: "InboundAction") -> List["Notification"]:
        self._require_phase("start a turn", SessionPhase.IN_PROGRESS)
        if self.pending_turn is not None:
            raise InvalidTransitionError("A turn is already in progress")
        team = self.current_round.next_team()
        if not team.has_member(action.player_id):
            self._require_player(action.player_id)
            raise InvalidTransitionError(f"It is {team.team_id}'s turn")

        entry = self.word_bank.draw()
        if entry is None:
            logger.info(f"[{self.session_id}] Word bank exhausted")
            return [self._finish(FinishReason.WORDS_EXHAUSTED)]

        taboo = []
        if self.config.use_taboo_words:
            taboo = entry.pick_taboo_words(self.rng, self.config.taboo_words_shown)
        turn = self.current_round.begin_turn(entry, taboo)
        logger.info(
            f"[{self.session_id}] Round {turn.round_number}: {team.team_id} "
            f"({turn.describer_id} -> {turn.guesser_id})"
        )
        return [self._builder.turn_started(turn)]

    def _handle_guessed(self, action: "InboundAction") -> List["Notification"]:
        turn = self._require_pending_turn()
        if action.player_id != turn.guesser_id:
            self._require_player(action.player_id)
            raise InvalidTransitionError("Only the current guesser can report a guess")
        return self._close_turn(turn, TurnOutcome.GUESSED)

    def _handle_skip(self, action: "InboundAction") -> List["Notification"]:
        turn = self._require_pending_turn()
        if action.player_id != turn.describer_id:
            self._require_player(action.player_id)
            raise InvalidTransitionError("Only the current describer can skip")
        cooldown = self.config.skip_cooldown_ms
        if cooldown and not turn.is_overdue(self.config.max_turn_ms) and turn.running_ms() < cooldown:
            raise InvalidTransitionError(
                f"Skip is available after {self.config.skip_cooldown_seconds:g}s"
            )
        return self._close_turn(turn, TurnOutcome.SKIPPED)

    def _require_pending_turn(self) -> Turn:
        self._require_phase("close a turn", SessionPhase.IN_PROGRESS)
        turn = self.pending_turn
        if turn is None:
            raise InvalidTransitionError("No turn in progress; nothing to do")
        return turn

    def _close_turn(self, turn: Turn, outcome: TurnOutcome) -> List["Notification"]:
        max_ms = self.config.max_turn_ms
        if turn.is_overdue(max_ms):
            outcome = TurnOutcome.TIMED_OUT
        turn.close(outcome, cap_ms=max_ms)
        return self._after_turn_closed(turn)

    def _after_turn_closed(self, turn: Turn) -> List["Notification"]:
        round_ = self.current_round
        if not round_.on_turn_closed():
            return [self._builder.turn_closed(turn, round_.next_team())]

        notifications = [self._builder.turn_closed(turn, None)]
        self.completed_rounds.append(round_)
        if self._game_over_after_round():
            notifications.append(self._builder.round_complete(round_, None))
            notifications.append(self._finish(FinishReason.ROUNDS_COMPLETED))
            return notifications

        self.current_round = Round(round_.number + 1, self.teams)
        notifications.append(self._builder.round_complete(round_, self.current_round))
        return notifications

    def _game_over_after_round(self) -> bool:
        if self.config.game_length is GameLength.FIXED_ROUNDS:
            return len(self.completed_rounds) >= self.config.rounds
        return False

    # ── End / query handlers ───────────────────────────────────

    def _handle_end(self, action: "InboundAction") -> List["Notification"]:
        if self.players:
            self._require_player(action.player_id)
        if self.phase is SessionPhase.FINISHED:
            return [self._builder.game_finished(self.result)]
        return [self._finish(FinishReason.ENDED)]

    def _handle_status(self, action: "InboundAction") -> List["Notification"]:
        return [self._builder.status(build_session_snapshot(self))]

    def _finish(self, reason: FinishReason) -> "Notification":
        if self.current_round is not None:
            self.current_round.discard_pending()
        self._advance_phase(SessionPhase.FINISHED)
        self.result = build_game_result(
            session_id=self.session_id,
            teams=self.teams,
            reason=reason.value,
            rounds_completed=len(self.completed_rounds),
        )
        logger.info(
            f"[{self.session_id}] Game finished ({reason.value}), winner: "
            f"{'TIE' if self.result.is_tie else self.result.winner_team_id}"
        )
        return self._builder.game_finished(self.result)
