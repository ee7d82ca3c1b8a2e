"""FrontendAdapter — the shared entry point for all Yatzy frontends.

Serializes every call into the GameSession behind one lock, records the
final score in the history once per game, and hands back the projected
view. Pure Python — no Flask or Textual dependency.

Each frontend (web, TUI) creates a FrontendAdapter wrapping a GameSession
and keeps only rendering and input translation for itself.
"""
import logging
import threading

from game_session import GameSession
from score_history import record_score, get_all_scores, get_high_score, get_high_scores
from state_projector import project

logger = logging.getLogger(__name__)


class FrontendAdapter:
    """Thread-safe wrapper around one GameSession.

    All action methods return the projected view taken under the same lock
    as the mutation, so a caller never sees a half-applied update.
    """

    def __init__(self, session=None, scores_path=None):
        self.session = session if session is not None else GameSession()
        self.scores_path = scores_path
        self.lock = threading.Lock()

        # One-shot flag: the history gets one entry per finished game
        self._scores_saved = False

    # ── Game actions ──────────────────────────────────────────────────────

    def get_state(self):
        """Return the current view without changing anything."""
        with self.lock:
            return project(self.session)

    def do_new_game(self):
        """Start a fresh game."""
        with self.lock:
            self.session.start_new_game()
            self._scores_saved = False
            logger.info("New game started")
            return project(self.session)

    def do_roll(self):
        """Roll unheld dice (no-op when out of rolls or game over)."""
        with self.lock:
            self.session.roll_dice()
            return project(self.session)

    def do_hold(self, die_index, held):
        """Hold or release one die."""
        with self.lock:
            self.session.set_held(die_index, held)
            return project(self.session)

    def do_score(self, category):
        """Score the current dice in a category.

        Raises:
            InvalidCategory: if the category is already scored. The session
                is left unchanged.
        """
        with self.lock:
            score = self.session.place_score(category)
            logger.info("Scored %d in %s (round %d)",
                        score, category.value, self.session.round - 1)
            self._save_scores()
            return project(self.session)

    def do_end(self):
        """End the game early and record its total."""
        with self.lock:
            total = self.session.end_game()
            logger.info("Game ended with total %d", total)
            self._save_scores()
            return project(self.session)

    # ── High scores ───────────────────────────────────────────────────────

    def get_high_scores(self, limit=10):
        """Return top scores from the history, highest first."""
        return get_high_scores(limit=limit, path=self.scores_path)

    def get_high_score(self):
        return get_high_score(path=self.scores_path)

    def get_games_played(self):
        """Number of finished games in the history."""
        return len(get_all_scores(path=self.scores_path))

    # ── Score saving ──────────────────────────────────────────────────────

    def _save_scores(self):
        """Persist the final total (idempotent — only saves once per game)."""
        if self._scores_saved:
            return
        if not self.session.game_over:
            return
        self._scores_saved = True
        try:
            record_score(self.session.total(), path=self.scores_path)
        except OSError:
            logger.warning("Could not write score history", exc_info=True)
