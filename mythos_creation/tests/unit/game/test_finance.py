"""
Tests for the credit rating spending bands.
"""

import pytest

from mythos_creation.game.finance import NOT_APPLICABLE, spending_level_for_credit


class TestSpendingLevel:
    """Test spending_level_for_credit."""

    @pytest.mark.parametrize(
        ("credit_rating", "level"),
        [
            (0, "Penniless"),
            (1, "Poor"),
            (9, "Poor"),
            (10, "Average"),
            (49, "Average"),
            (50, "Wealthy"),
            (89, "Wealthy"),
            (90, "Rich"),
            (98, "Rich"),
            (99, "Super Rich"),
        ],
    )
    def test_band_boundaries(self, credit_rating, level):
        """Test each band's inclusive bounds."""
        snapshot = spending_level_for_credit(credit_rating)

        assert snapshot.spending_level == level
        assert snapshot.cash == ""
        assert snapshot.assets == ""

    @pytest.mark.parametrize("credit_rating", [-1, 100, 250])
    def test_outside_range(self, credit_rating):
        """Test ratings outside 0-99 are not applicable."""
        snapshot = spending_level_for_credit(credit_rating)

        assert snapshot.spending_level == NOT_APPLICABLE
        assert snapshot.cash == NOT_APPLICABLE
        assert snapshot.assets == NOT_APPLICABLE
