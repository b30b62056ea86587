"""Reward and damage rules for Survive & Scale."""

# Base reward for a perfect year, compounded by growth per year
BASE_YEARLY_REWARD = 1_000_000_000
YEARLY_GROWTH = 1.07

# Health lost for each wrong answer
WRONG_ANSWER_DAMAGE = 50

# Health regained for a year with both answers correct
PERFECT_YEAR_HEAL = 10


def yearly_increment(year: int) -> int:
    """Calculate the money earned for a perfect year.

    Args:
        year: Year number, starting at 1.

    Returns:
        ``round(1e9 * 1.07 ** year)``.
    """
    return round(BASE_YEARLY_REWARD * YEARLY_GROWTH**year)
