#!/usr/bin/env python3
"""
Yatzy TUI — Terminal-based frontend using Textual.

Keyboard-driven interface with box-art dice and a scorecard table.
Everything it draws comes from the projected view, the same dict the
web API returns.
"""
import random

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, Center
from textual.screen import ModalScreen
from textual.widgets import Button, Footer, Header, Static
from textual import on

from game_engine import InvalidCategory
from game_session import GameSession
from frontend_adapter import FrontendAdapter
from settings import load_settings
from state_projector import CATEGORY_ORDER, CATEGORY_TOOLTIPS, UPPER_CATEGORIES


# ── Box-art die faces ─────────────────────────────────────────────────────────

# Pip positions on a 3x3 grid, (row, column)
PIPS = {
    1: {(1, 1)},
    2: {(0, 0), (2, 2)},
    3: {(0, 0), (1, 1), (2, 2)},
    4: {(0, 0), (0, 2), (2, 0), (2, 2)},
    5: {(0, 0), (0, 2), (1, 1), (2, 0), (2, 2)},
    6: {(0, 0), (0, 2), (1, 0), (1, 2), (2, 0), (2, 2)},
}


def _face(value, corners, edge, side):
    """Draw one 5-line die face with the given border characters."""
    tl, tr, bl, br = corners
    rows = [
        side + " " + " ".join("●" if (r, c) in PIPS[value] else " " for c in range(3)) + " " + side
        for r in range(3)
    ]
    return [tl + edge * 7 + tr] + rows + [bl + edge * 7 + br]


BOX_ART = {v: _face(v, "┌┐└┘", "─", "│") for v in PIPS}
BOX_ART_HELD = {v: _face(v, "╔╗╚╝", "═", "║") for v in PIPS}


def render_dice_box(dice, holds):
    """Render 5 dice as box art, side by side, held dice double-bordered."""
    lines = []
    for row in range(5):
        parts = []
        for value, held in zip(dice, holds):
            art = BOX_ART_HELD if held else BOX_ART
            parts.append(art[value][row])
        lines.append("  ".join(parts))

    label_parts = []
    for i, held in enumerate(holds):
        held_label = " HELD" if held else ""
        label_parts.append(f"  [{i+1}]{held_label}".ljust(11))
    lines.append("".join(label_parts))
    return "\n".join(lines)


def next_open_index(view, current, direction):
    """Move the category cursor to the next/previous open category.

    Args:
        view: Projected game view
        current: Current index into CATEGORY_ORDER, or None
        direction: +1 for forward, -1 for backward

    Returns:
        New index, or None when no category is open
    """
    open_names = set(view["availableCategories"])
    unfilled = [i for i, cat in enumerate(CATEGORY_ORDER) if cat.value in open_names]
    if not unfilled:
        return None
    if current is None:
        return unfilled[0] if direction > 0 else unfilled[-1]
    if direction > 0:
        candidates = [i for i in unfilled if i > current]
        return candidates[0] if candidates else unfilled[0]
    candidates = [i for i in unfilled if i < current]
    return candidates[-1] if candidates else unfilled[-1]


def format_scorecard(view, selected_index=None):
    """Render the scorecard text, with previews for open categories."""
    lines = ["[bold]── UPPER SECTION ──[/bold]"]

    def row(idx, cat):
        marker = ">>" if idx == selected_index else "  "
        score = view["scores"][cat.value]
        if score is not None:
            return f"{marker}{cat.value:<18} {score:>3}"
        potential = view["possibleScores"][cat.value]
        if idx == selected_index:
            return f"{marker}[bold]{cat.value:<18} ({potential:>3})[/bold]"
        elif potential > 0:
            return f"{marker}[green]{cat.value:<18} ({potential:>3})[/green]"
        return f"{marker}[dim]{cat.value:<18} ({potential:>3})[/dim]"

    for idx, cat in enumerate(CATEGORY_ORDER):
        if cat == CATEGORY_ORDER[len(UPPER_CATEGORIES)]:
            lines.append(f"  Total: {view['upperSubtotal']}  Bonus: {view['upperBonus']}")
            lines.append("[bold]── LOWER SECTION ──[/bold]")
        lines.append(row(idx, cat))

    lines.append(f"[bold]  GRAND TOTAL: {view['total']}[/bold]")

    if selected_index is not None:
        tip = CATEGORY_TOOLTIPS.get(CATEGORY_ORDER[selected_index], "")
        lines.append(f"\n[dim]{tip}[/dim]")
    return "\n".join(lines)


# ── Modal Screens ────────────────────────────────────────────────────────────

class HelpScreen(ModalScreen):
    """Help overlay showing key bindings."""

    BINDINGS = [
        Binding("escape", "dismiss", "Close"),
        Binding("question_mark", "dismiss", "Close"),
    ]

    def compose(self) -> ComposeResult:
        controls = [
            ("Space", "Roll dice"),
            ("1-5", "Toggle die hold"),
            ("Tab / ↓", "Next category"),
            ("Shift+Tab / ↑", "Previous category"),
            ("Enter", "Score selected category"),
            ("E", "End game"),
            ("N", "New game"),
            ("H", "High scores"),
            ("Esc", "Close overlay / Quit"),
            ("?", "This help screen"),
        ]
        text = "[bold]CONTROLS[/bold]\n\n"
        for key, desc in controls:
            text += f"  {key:<20} {desc}\n"
        text += "\n[dim]Press Esc or ? to close[/dim]"
        yield Center(Static(text, id="help-panel"))


class HighScoreScreen(ModalScreen):
    """High score overlay."""

    BINDINGS = [
        Binding("escape", "dismiss", "Close"),
        Binding("h", "dismiss", "Close"),
    ]

    def compose(self) -> ComposeResult:
        entries = self.app.adapter.get_high_scores(limit=10)
        text = "[bold]HIGH SCORES[/bold]\n"
        text += "─" * 30 + "\n"
        if not entries:
            text += "\n  No scores recorded yet.\n"
        else:
            for i, entry in enumerate(entries):
                date = entry.get("date", "")[:10]
                text += f"{i+1:<4} {entry.get('score', '?'):<8} {date}\n"
        text += f"\nGames played: {self.app.adapter.get_games_played()}\n"
        text += "\n[dim]H or Esc to close[/dim]"
        yield Center(Static(text, id="scores-panel"))


# ── Main App ─────────────────────────────────────────────────────────────────

class YatzyApp(App):
    """Yatzy terminal UI application."""

    CSS = """
    Screen {
        layout: vertical;
    }

    #game-area {
        layout: horizontal;
        height: 1fr;
    }

    #dice-panel {
        width: 60;
        padding: 1 2;
    }

    #scorecard-panel {
        width: 1fr;
        padding: 1 2;
    }

    #round-display, #dice-display, #status-display {
        height: auto;
    }

    #roll-btn {
        margin-top: 1;
        width: 20;
    }

    #help-panel, #scores-panel {
        padding: 2 4;
        border: thick $accent;
        background: $surface;
        width: 60;
        height: auto;
    }
    """

    BINDINGS = [
        Binding("space", "roll", "Roll", show=True),
        Binding("1", "hold(0)", "Hold 1"),
        Binding("2", "hold(1)", "Hold 2"),
        Binding("3", "hold(2)", "Hold 3"),
        Binding("4", "hold(3)", "Hold 4"),
        Binding("5", "hold(4)", "Hold 5"),
        Binding("tab", "move_cat(1)", "Next category", show=True),
        Binding("shift+tab", "move_cat(-1)", "Prev category"),
        Binding("down", "move_cat(1)", "Next"),
        Binding("up", "move_cat(-1)", "Prev"),
        Binding("enter", "score", "Score", show=True),
        Binding("e", "end_game", "End game"),
        Binding("n", "new_game", "New game"),
        Binding("h", "high_scores", "High scores"),
        Binding("question_mark", "help", "Help"),
        Binding("escape", "quit_or_close", "Quit"),
    ]

    def __init__(self, adapter=None):
        super().__init__()
        self.adapter = adapter if adapter is not None else FrontendAdapter()
        self.view = self.adapter.get_state()
        self.selected_index = None
        self.message = ""

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static("", id="round-display")
        with Horizontal(id="game-area"):
            with Vertical(id="dice-panel"):
                yield Static("", id="dice-display")
                yield Button("ROLL", id="roll-btn", variant="primary")
                yield Static("", id="status-display")
            with Vertical(id="scorecard-panel"):
                yield Static("", id="scorecard-display")
        yield Footer()

    def on_mount(self):
        self.title = "Yatzy"
        self._refresh_display()

    def _refresh_display(self):
        """Redraw every widget from the latest view."""
        view = self.view
        self.query_one("#round-display", Static).update(
            f"[bold]Round {min(view['round'], len(CATEGORY_ORDER))}/{len(CATEGORY_ORDER)}[/bold]"
        )
        self.query_one("#dice-display", Static).update(
            render_dice_box(view["dice"], view["holds"])
        )
        self.query_one("#status-display", Static).update(self._status_text())
        self.query_one("#scorecard-display", Static).update(
            format_scorecard(view, self.selected_index)
        )
        self.query_one("#roll-btn", Button).disabled = (
            view["gameOver"] or view["rollsLeft"] == 0
        )

    def _status_text(self):
        view = self.view
        lines = []
        if view["gameOver"]:
            lines.append("[bold]═══ GAME OVER ═══[/bold]")
            lines.append(f"Final Score: [bold]{view['total']}[/bold]")
            lines.append(f"High Score: {self.adapter.get_high_score()}")
            lines.append("[dim]Press N for new game[/dim]")
        elif view["rollsLeft"] == 0:
            lines.append("[bold]No rolls left, pick a category[/bold]")
        else:
            lines.append(f"Rolls left: {view['rollsLeft']}")
        if self.message:
            lines.append(f"[red]{self.message}[/red]")
        return "\n".join(lines)

    def _apply(self, view):
        self.view = view
        self.message = ""
        self._refresh_display()

    # ── Actions ──────────────────────────────────────────────────────────

    def action_roll(self):
        self._apply(self.adapter.do_roll())

    @on(Button.Pressed, "#roll-btn")
    def on_roll_button(self):
        self.action_roll()

    def action_hold(self, index: int):
        held = self.view["holds"][index]
        self._apply(self.adapter.do_hold(index, not held))

    def action_move_cat(self, direction: int):
        self.selected_index = next_open_index(self.view, self.selected_index, direction)
        self._refresh_display()

    def action_score(self):
        if self.selected_index is None:
            return
        cat = CATEGORY_ORDER[self.selected_index]
        try:
            view = self.adapter.do_score(cat)
        except InvalidCategory as exc:
            self.message = str(exc)
            self._refresh_display()
            return
        self.selected_index = None
        self._apply(view)

    def action_end_game(self):
        self.selected_index = None
        self._apply(self.adapter.do_end())

    def action_new_game(self):
        self.selected_index = None
        self._apply(self.adapter.do_new_game())

    def action_high_scores(self):
        self.push_screen(HighScoreScreen())

    def action_help(self):
        self.push_screen(HelpScreen())

    def action_quit_or_close(self):
        # If any screen is stacked, pop it
        if len(self.screen_stack) > 1:
            self.pop_screen()
        else:
            self.exit()


def main(argv=None):
    """Entry point for the TUI."""
    import argparse
    settings = load_settings()
    parser = argparse.ArgumentParser(description="Yatzy in the terminal")
    parser.add_argument("--seed", type=int, default=settings["seed"],
                        help="Seed the dice for a reproducible game")
    args = parser.parse_args(argv)

    session = GameSession(rng=random.Random(args.seed))
    app = YatzyApp(adapter=FrontendAdapter(session))
    app.run()


if __name__ == "__main__":
    main()
