"""Projection of a GameSession into the JSON view sent to every frontend.

The view is built from fresh lists and dicts of plain values, so nothing a
caller does with it can reach back into the session.
"""

from game_engine import Category, UPPER_CATEGORIES


CATEGORY_ORDER = list(Category)

LOWER_CATEGORIES = [cat for cat in CATEGORY_ORDER if cat not in UPPER_CATEGORIES]

CATEGORY_TOOLTIPS = {
    Category.ONES: "Sum of all dice showing 1",
    Category.TWOS: "Sum of all dice showing 2",
    Category.THREES: "Sum of all dice showing 3",
    Category.FOURS: "Sum of all dice showing 4",
    Category.FIVES: "Sum of all dice showing 5",
    Category.SIXES: "Sum of all dice showing 6",
    Category.THREE_OF_KIND: "3 of the same, score = sum of all dice",
    Category.FOUR_OF_KIND: "4 of the same, score = sum of all dice",
    Category.FULL_HOUSE: "3 of one + 2 of another = 25",
    Category.SMALL_STRAIGHT: "4 consecutive dice = 30",
    Category.LARGE_STRAIGHT: "5 consecutive dice = 40",
    Category.CHANCE: "Sum of all dice, no pattern needed",
    Category.YATZY: "All 5 dice the same = 50",
}


def project(session):
    """Return a complete JSON-serializable dict of the session state.

    Field names are the wire contract of the HTTP API.
    """
    engine = session.engine
    dice_values = session.dice.get_values()

    scores = {}
    possible_scores = {}
    for cat in CATEGORY_ORDER:
        score = engine.score_for(cat)
        scores[cat.value] = score
        if score is None:
            possible_scores[cat.value] = engine.calculate_score(cat, dice_values)
        else:
            # Never preview a locked category
            possible_scores[cat.value] = None

    return {
        "dice": dice_values,
        "holds": session.dice.get_held(),
        "rollsLeft": session.rolls_left,
        "gameOver": session.game_over,
        "scores": scores,
        "possibleScores": possible_scores,
        "upperSubtotal": engine.upper_subtotal(),
        "upperBonus": engine.upper_bonus(),
        "total": engine.total(),
        "round": session.round,
        "availableCategories": [cat.value for cat in engine.available_categories()],
    }
