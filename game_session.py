"""
GameSession — the round/roll state machine for one Yatzy game.

Owns one DiceSet and one ScoreEngine. Frontends never touch those directly;
they call the action methods here and read the result through
state_projector.project().
"""
from __future__ import annotations

import logging

from game_engine import (
    DiceSet,
    InvalidCategory,
    ScoreEngine,
)

logger = logging.getLogger(__name__)

ROLLS_PER_ROUND = 3


class GameSession:
    """State machine for a single-player game.

    States are derived from the fields rather than stored:
    rolling (rolls_left > 0), out of rolls (rolls_left == 0, must score),
    and game over, which only start_new_game() leaves.
    """

    def __init__(self, rng=None) -> None:
        """Initialize a fresh game.

        Args:
            rng: Optional random source passed to the DiceSet. Anything with
                 randint(a, b), e.g. random.Random(seed).
        """
        self.dice = DiceSet(rng)
        self.engine = ScoreEngine()
        self.round = 1
        self.rolls_left = ROLLS_PER_ROUND
        self.game_over = False

    # ── Properties ────────────────────────────────────────────────────────

    @property
    def dice_values(self) -> list[int]:
        return self.dice.get_values()

    @property
    def held_flags(self) -> list[bool]:
        return self.dice.get_held()

    @property
    def can_roll(self) -> bool:
        """Whether dice can be rolled right now."""
        return not self.game_over and self.rolls_left > 0

    def available_categories(self):
        return self.engine.available_categories()

    def total(self) -> int:
        return self.engine.total()

    # ── Action methods ────────────────────────────────────────────────────

    def roll_dice(self) -> list[int]:
        """Roll all unheld dice and use up one roll.

        When the game is over or no rolls are left this does nothing and
        returns the current dice.
        """
        if not self.can_roll:
            logger.debug("Roll ignored (rolls_left=%d, game_over=%s)",
                         self.rolls_left, self.game_over)
            return self.dice.get_values()
        self.rolls_left -= 1
        return self.dice.roll()

    def set_held(self, index: int, held: bool) -> None:
        """Hold or release a die. Allowed at any time; bad indices are ignored."""
        self.dice.set_held(index, held)

    def place_score(self, category) -> int:
        """Score the current dice in a category and advance to the next round.

        An open category can still be scored after end_game(); the game
        stays over.

        Raises:
            InvalidCategory: if the category already holds a score.

        Returns:
            The score written
        """
        if not self.engine.is_valid_selection(category, self.dice.get_values()):
            raise InvalidCategory(category)

        score = self.engine.calculate_score(category, self.dice.get_values())
        self.engine.set_score(category, score)
        self._end_turn()
        return score

    def end_game(self) -> int:
        """Mark the game finished and return the final total."""
        self.game_over = True
        return self.engine.total()

    def start_new_game(self) -> None:
        """Reset to a brand new game. The random source is kept."""
        self.dice.reset()
        self.engine = ScoreEngine()
        self.round = 1
        self.rolls_left = ROLLS_PER_ROUND
        self.game_over = False

    # ── Internal ─────────────────────────────────────────────────────────

    def _end_turn(self) -> None:
        """Start the next round; the game ends once every category is scored."""
        self.round += 1
        self.rolls_left = ROLLS_PER_ROUND
        self.dice.clear_holds()
        if self.engine.is_complete():
            self.end_game()
