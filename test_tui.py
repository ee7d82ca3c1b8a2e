"""Tests for tui.py's pure rendering and navigation helpers."""

from game_engine import Category
from game_session import GameSession
from state_projector import CATEGORY_ORDER, project
from tui import BOX_ART, BOX_ART_HELD, format_scorecard, next_open_index, render_dice_box


# ── render_dice_box ──────────────────────────────────────────────────────────

class TestRenderDiceBox:

    def test_faces(self):
        assert BOX_ART[1] == [
            "┌───────┐",
            "│       │",
            "│   ●   │",
            "│       │",
            "└───────┘",
        ]
        assert BOX_ART[2][1] == "│ ●     │"
        assert BOX_ART[6][2] == "│ ●   ● │"
        assert BOX_ART_HELD[5][0] == "╔═══════╗"
        assert BOX_ART_HELD[5][2] == "║   ●   ║"

    def test_six_lines(self):
        text = render_dice_box([1, 2, 3, 4, 5], [False] * 5)
        assert len(text.split("\n")) == 6

    def test_held_die_uses_double_border(self):
        text = render_dice_box([6, 6, 6, 6, 6], [True, False, False, False, False])
        first = text.split("\n")[0]
        assert first.startswith(BOX_ART_HELD[6][0])
        assert first.endswith(BOX_ART[6][0])

    def test_labels(self):
        text = render_dice_box([1] * 5, [False, True, False, False, False])
        labels = text.split("\n")[-1]
        assert "[1]" in labels and "[5]" in labels
        assert labels.count("HELD") == 1


# ── next_open_index ──────────────────────────────────────────────────────────

class TestNextOpenIndex:

    def test_first_and_last(self):
        view = project(GameSession())
        assert next_open_index(view, None, 1) == 0
        assert next_open_index(view, None, -1) == len(CATEGORY_ORDER) - 1

    def test_skips_scored(self):
        session = GameSession()
        session.engine.set_score(Category.TWOS, 4)
        view = project(session)
        assert next_open_index(view, 0, 1) == 2
        assert next_open_index(view, 2, -1) == 0

    def test_wraps(self):
        view = project(GameSession())
        assert next_open_index(view, len(CATEGORY_ORDER) - 1, 1) == 0
        assert next_open_index(view, 0, -1) == len(CATEGORY_ORDER) - 1

    def test_none_when_all_scored(self):
        session = GameSession()
        for cat in Category:
            session.engine.set_score(cat, 0)
        assert next_open_index(project(session), 3, 1) is None


# ── format_scorecard ─────────────────────────────────────────────────────────

class TestFormatScorecard:

    def test_lists_every_category(self):
        text = format_scorecard(project(GameSession()))
        for cat in Category:
            assert cat.value in text
        assert "GRAND TOTAL: 0" in text

    def test_selected_row_marked_with_tooltip(self):
        text = format_scorecard(project(GameSession()), selected_index=12)
        assert ">>[bold]Yatzy" in text
        assert "All 5 dice the same = 50" in text

    def test_scored_value_shown(self):
        session = GameSession()
        session.place_score(Category.YATZY)
        text = format_scorecard(project(session))
        assert "Yatzy" in text and " 50" in text
        assert "GRAND TOTAL: 50" in text
