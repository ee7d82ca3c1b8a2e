"""
Yatzy Game Engine - Pure scoring and dice logic without frontend dependencies

This module contains the dice set, the thirteen scoring rules and the per-game
score table. Nothing here knows about HTTP or the terminal, so every rule can
be unit tested with plain integers and a seeded random source.
"""
from collections import Counter
from enum import Enum
import random


NUM_DICE = 5
NUM_FACES = 6

FULL_HOUSE_POINTS = 25
SMALL_STRAIGHT_POINTS = 30
LARGE_STRAIGHT_POINTS = 40
YATZY_POINTS = 50

UPPER_BONUS_THRESHOLD = 63
UPPER_BONUS_POINTS = 35


class YatzyError(Exception):
    """Base class for errors raised by the game engine."""


class InvalidCategory(YatzyError):
    """Raised when scoring a category that already holds a score."""

    def __init__(self, category):
        self.category = category
        name = category.value if isinstance(category, Category) else category
        super().__init__(f"Cannot place score for category: {name}")


class Category(Enum):
    """Yatzy score categories, in scorecard order"""
    ONES = "Ones"
    TWOS = "Twos"
    THREES = "Threes"
    FOURS = "Fours"
    FIVES = "Fives"
    SIXES = "Sixes"
    THREE_OF_KIND = "Three of a kind"
    FOUR_OF_KIND = "Four of a kind"
    FULL_HOUSE = "Full House"
    SMALL_STRAIGHT = "Small Straight"
    LARGE_STRAIGHT = "Large Straight"
    CHANCE = "Chance"
    YATZY = "Yatzy"


UPPER_CATEGORIES = (
    Category.ONES, Category.TWOS, Category.THREES,
    Category.FOURS, Category.FIVES, Category.SIXES,
)

_UPPER_FACE = {cat: face for face, cat in enumerate(UPPER_CATEGORIES, start=1)}


def category_by_name(name):
    """Look up a Category by its display name. Returns None if unknown."""
    for cat in Category:
        if cat.value == name:
            return cat
    return None


# ── Dice ─────────────────────────────────────────────────────────────────────

class DiceSet:
    """The five dice and their held flags.

    The random source is injected so rolls can be made deterministic in
    tests. Any object with a ``randint(a, b)`` method works.
    """

    def __init__(self, rng=None):
        self._rng = rng if rng is not None else random.Random()
        self._values = [1] * NUM_DICE
        self._held = [False] * NUM_DICE

    def roll(self):
        """
        Roll every die that is not held.

        Returns:
            List of the five face values after the roll
        """
        for i in range(NUM_DICE):
            if not self._held[i]:
                self._values[i] = self._rng.randint(1, NUM_FACES)
        return self.get_values()

    def set_held(self, index, held):
        """
        Set the held flag of one die.

        Indices outside 0-4 (or that are not ints) are ignored.

        Args:
            index: Position of the die (0-4)
            held: Whether the die should be kept on the next roll
        """
        if isinstance(index, bool) or not isinstance(index, int):
            return
        if 0 <= index < NUM_DICE:
            self._held[index] = bool(held)

    def clear_holds(self):
        """Release every die, keeping the face values."""
        self._held = [False] * NUM_DICE

    def reset(self):
        """Back to the initial state: all ones, nothing held."""
        self._values = [1] * NUM_DICE
        self._held = [False] * NUM_DICE

    def get_values(self):
        return list(self._values)

    def get_held(self):
        return list(self._held)


# ── Scoring rules ────────────────────────────────────────────────────────────

def normalize_dice(dice):
    """
    Validate a roll of dice values.

    Args:
        dice: Sequence of face values

    Returns:
        Tuple of the five values, or None if the roll is not exactly five
        integers in 1-6
    """
    try:
        values = tuple(dice)
    except TypeError:
        return None
    if len(values) != NUM_DICE:
        return None
    for v in values:
        if isinstance(v, bool) or not isinstance(v, int) or not 1 <= v <= NUM_FACES:
            return None
    return values


def count_values(dice):
    """Count occurrences of each face value."""
    return Counter(dice)


def has_n_of_kind(dice, n):
    """True if at least n dice show the same face."""
    return max(count_values(dice).values()) >= n


def has_full_house(dice):
    """
    Check if dice form a full house (3 of one value, 2 of another).

    Five of a kind is not a full house.
    """
    sorted_counts = sorted(count_values(dice).values(), reverse=True)
    return sorted_counts == [3, 2]


def has_small_straight(dice):
    """Check if dice contain 4 consecutive values (order and duplicates don't matter)."""
    values = set(dice)
    small_straights = [{1, 2, 3, 4}, {2, 3, 4, 5}, {3, 4, 5, 6}]
    return any(straight.issubset(values) for straight in small_straights)


def has_large_straight(dice):
    """Check if dice are exactly 1-2-3-4-5 or 2-3-4-5-6."""
    values = set(dice)
    large_straights = [{1, 2, 3, 4, 5}, {2, 3, 4, 5, 6}]
    return any(straight == values for straight in large_straights)


def has_yatzy(dice):
    """Check if all five dice match."""
    return has_n_of_kind(dice, NUM_DICE)


def calculate_score(category, dice):
    """
    Calculate the score for a given category and dice

    Invalid input never raises: a roll that isn't five values in 1-6, or a
    category that isn't a Category, scores 0.

    Args:
        category: Category enum value
        dice: Sequence of five face values

    Returns:
        Integer score for the category (0 if doesn't qualify)
    """
    values = normalize_dice(dice)
    if values is None:
        return 0

    total = sum(values)
    counts = count_values(values)

    # Upper section - sum of matching dice
    if category in _UPPER_FACE:
        face = _UPPER_FACE[category]
        return counts[face] * face

    elif category == Category.THREE_OF_KIND:
        return total if has_n_of_kind(values, 3) else 0

    elif category == Category.FOUR_OF_KIND:
        return total if has_n_of_kind(values, 4) else 0

    elif category == Category.FULL_HOUSE:
        return FULL_HOUSE_POINTS if has_full_house(values) else 0

    elif category == Category.SMALL_STRAIGHT:
        return SMALL_STRAIGHT_POINTS if has_small_straight(values) else 0

    elif category == Category.LARGE_STRAIGHT:
        return LARGE_STRAIGHT_POINTS if has_large_straight(values) else 0

    elif category == Category.CHANCE:
        return total

    elif category == Category.YATZY:
        return YATZY_POINTS if has_yatzy(values) else 0

    return 0


# ── Score table ──────────────────────────────────────────────────────────────

class ScoreEngine:
    """Scoring rules plus the write-once score table for one game.

    A category maps to None until it is scored. None is "open"; 0 is a
    real score (a burned category).
    """

    def __init__(self):
        self._scores = {category: None for category in Category}

    @staticmethod
    def calculate_score(category, dice):
        return calculate_score(category, dice)

    @property
    def scores(self):
        """Copy of the score table."""
        return dict(self._scores)

    def score_for(self, category):
        return self._scores[category]

    def is_filled(self, category):
        """Check if a category has been scored"""
        return self._scores[category] is not None

    def is_valid_selection(self, category, dice=None):
        """
        Whether the category may still be chosen.

        Any open category is valid, even if the dice score 0 in it.
        """
        return not self.is_filled(category)

    def set_score(self, category, value):
        """Set the score for a category. No-op if it already has one."""
        if not self.is_filled(category):
            self._scores[category] = value

    def upper_subtotal(self):
        """Sum of Ones through Sixes, open categories counting as 0"""
        return sum(self._scores[cat] or 0 for cat in UPPER_CATEGORIES)

    def upper_bonus(self):
        """35 points if the upper subtotal reaches 63"""
        return UPPER_BONUS_POINTS if self.upper_subtotal() >= UPPER_BONUS_THRESHOLD else 0

    def lower_subtotal(self):
        return sum(score for cat, score in self._scores.items()
                   if cat not in _UPPER_FACE and score is not None)

    def total(self):
        """Grand total including bonus"""
        return self.upper_subtotal() + self.upper_bonus() + self.lower_subtotal()

    def available_categories(self):
        """Open categories, in scorecard order."""
        return [cat for cat in Category if self._scores[cat] is None]

    def is_complete(self):
        """Check if all categories are filled"""
        return all(score is not None for score in self._scores.values())
