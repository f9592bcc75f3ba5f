"""
Spending level by credit rating.

Cash and asset amounts depend on the era and are read by the player from the
handbook table, so the snapshot only names the band.
"""

from ..models.results import FinanceSnapshot

NOT_APPLICABLE = "N/A"

# (min, max, spending level), inclusive
CREDIT_BANDS: tuple[tuple[int, int, str], ...] = (
    (0, 0, "Penniless"),
    (1, 9, "Poor"),
    (10, 49, "Average"),
    (50, 89, "Wealthy"),
    (90, 98, "Rich"),
    (99, 99, "Super Rich"),
)


def spending_level_for_credit(credit_rating: int) -> FinanceSnapshot:
    """
    Map a credit rating to its spending band.

    Args:
        credit_rating: Credit rating (0-99)

    Returns:
        FinanceSnapshot: The band; "N/A" everywhere when the rating is outside 0-99
    """
    for low, high, level in CREDIT_BANDS:
        if low <= credit_rating <= high:
            return FinanceSnapshot(spending_level=level)
    return FinanceSnapshot(spending_level=NOT_APPLICABLE, cash=NOT_APPLICABLE, assets=NOT_APPLICABLE)
