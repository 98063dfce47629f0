"""
Game Engine - Applies clicks to the game state.

The engine is the single point of state mutation.
All state changes go through select_number(), usually via apply().

Design principles:
- select_number() is status-agnostic and always applies the rule
- apply() gates clicks the way the presentation must (game over, used numbers)
- Contract breaches raise GameInvariantError instead of corrupting state
"""

from __future__ import annotations
import logging

from .state import (
    GameState, GameSnapshot, GameInvariantError, GameStatus, NumberStatus, ALL_NUMBERS,
)
from .action import Action, ActionType, ActionResult, ErrorCode
from .generator import PuzzleGenerator, sum_of
from .evaluator import evaluate_state, click_status, snapshot

logger = logging.getLogger(__name__)

DEFAULT_DURATION_SECONDS = 10


class GameEngine:
    """
    Owns one GameState and the generator that feeds it.

    Usage:
        engine = GameEngine(PuzzleGenerator.seeded(7))
        result = engine.apply(Action.select(3, NumberStatus.AVAILABLE))
        view = engine.snapshot()
    """

    def __init__(
        self,
        generator: PuzzleGenerator | None = None,
        duration_seconds: int = DEFAULT_DURATION_SECONDS,
        state: GameState | None = None,
    ):
        self.generator = generator or PuzzleGenerator()
        self.duration_seconds = duration_seconds
        self.state = state if state is not None else self.new_state()

    def new_state(self) -> GameState:
        """Fresh game: random target, full pool, no candidates."""
        return GameState(
            target_sum=self.generator.initial_target(),
            available_pool=set(ALL_NUMBERS),
            candidates=[],
            seconds_remaining=self.duration_seconds,
        )

    @property
    def status(self) -> GameStatus:
        return evaluate_state(self.state)

    def snapshot(self) -> GameSnapshot:
        return snapshot(self.state)

    def select_number(self, number: int, current_status: NumberStatus) -> bool:
        """
        Toggle a number in or out of the candidates.

        If the candidates then sum to the target the round is won: they
        are consumed, a new solvable target is drawn from what is left,
        and the candidates are cleared.

        Returns True if the click won the round.
        """
        state = self.state
        if number not in ALL_NUMBERS:
            raise GameInvariantError(f"Number out of range: {number}")

        if NumberStatus(current_status) == NumberStatus.AVAILABLE:
            if number not in state.available_pool:
                raise GameInvariantError(f"{number} is not available")
            state.available_pool.discard(number)
            state.candidates.append(number)
        else:
            if number not in state.candidates:
                raise GameInvariantError(f"{number} is not a candidate")
            state.candidates.remove(number)
            state.available_pool.add(number)

        if sum_of(state.candidates) != state.target_sum:
            logger.debug("Candidates %s target %d", state.candidates, state.target_sum)
            state.check_invariants()
            return False

        winning = list(state.candidates)
        remaining = state.available_pool - set(winning)
        if remaining:
            state.target_sum = self.generator.next_target(remaining)
        state.available_pool = remaining
        state.candidates.clear()
        state.rounds_won += 1
        logger.info(
            "Round %d won with %s, %d numbers left",
            state.rounds_won, winning, len(state.available_pool),
        )
        state.check_invariants()
        return True

    def reset(self) -> GameState:
        """Throw away the current game and start a new one."""
        self.state = self.new_state()
        logger.info("New game, target %d", self.state.target_sum)
        return self.state

    def apply(self, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Ignored clicks come back as failures with the state untouched.
        """
        handlers = {
            ActionType.SELECT_NUMBER: self._handle_select,
            ActionType.RESET: self._handle_reset,
        }
        handler = handlers.get(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code=ErrorCode.NO_HANDLER,
            )

        result = handler(action)
        if result.success and result.new_state is not None:
            result.new_state.action_history.append(action)
        return result

    def _validate_select(self, action: Action) -> ActionResult | None:
        if self.status != GameStatus.ACTIVE:
            return ActionResult.failure(
                f"Game is {self.status.value} - no selections allowed",
                error_code=ErrorCode.GAME_OVER,
            )

        actual = click_status(self.state, action.number)
        if actual == NumberStatus.USED:
            return ActionResult.failure(
                f"{action.number} was already used",
                error_code=ErrorCode.NUMBER_USED,
            )
        shown = NumberStatus.CANDIDATE if action.current_status.is_candidate else action.current_status
        if shown != actual:
            return ActionResult.failure(
                f"{action.number} is {actual.value}, not {action.current_status.value}",
                error_code=ErrorCode.STALE_STATUS,
            )
        return None

    def _handle_select(self, action: Action) -> ActionResult:
        rejection = self._validate_select(action)
        if rejection:
            logger.debug("Ignored click on %s: %s", action.number, rejection.error)
            return rejection

        was_candidate = action.current_status.is_candidate
        target = self.state.target_sum
        won = self.select_number(action.number, action.current_status)

        if won:
            changes = [f"Round won: {target} stars matched"]
            if self.status == GameStatus.WON:
                changes.append("All numbers used - game won")
            else:
                changes.append(f"New target: {self.state.target_sum}")
        elif was_candidate:
            changes = [f"{action.number} deselected"]
        else:
            changes = [f"{action.number} selected"]

        return ActionResult.success_with_state(self.state, changes=changes, round_won=won)

    def _handle_reset(self, action: Action) -> ActionResult:
        state = self.reset()
        return ActionResult.success_with_state(state, changes=[f"New game: {state.target_sum} stars"])
