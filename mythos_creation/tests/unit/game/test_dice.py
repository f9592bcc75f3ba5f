"""
Tests for the dice roller.

Covers notation parsing, detailed roll steps, attribute clamping and the
injectable random source.
"""

# pylint: disable=redefined-outer-name
# Justification: pytest fixtures redefine names

import random

import pytest

from mythos_creation.exceptions import ConfigurationError, DiceNotationError
from mythos_creation.game.dice import DiceNotation, DiceRoller, clamp_attribute, parse_notation


class TestParseNotation:
    """Test compound notation parsing."""

    def test_parse_simple_notation(self):
        """Test NDM with a multiplier."""
        assert parse_notation("3D6x5") == DiceNotation(count=3, sides=6, add=0, multiplier=5)

    def test_parse_added_notation(self):
        """Test (NDM+A)xK."""
        assert parse_notation("(2D6+6)x5") == DiceNotation(count=2, sides=6, add=6, multiplier=5)

    def test_parse_without_multiplier(self):
        """Test plain NDM defaults the multiplier to 1."""
        parsed = parse_notation("1D100")
        assert parsed.count == 1
        assert parsed.sides == 100
        assert parsed.multiplier == 1

    @pytest.mark.parametrize("notation", [" 3d6 x 5 ", "3D6*5", "3D6×5", "3d6X5"])
    def test_parse_ignores_whitespace_and_case(self, notation):
        """Test whitespace, case and multiplier symbols are accepted."""
        assert parse_notation(notation) == DiceNotation(count=3, sides=6, add=0, multiplier=5)

    @pytest.mark.parametrize("notation", ["", "3D", "D", "abc", "3D6x", "(2D6+6", "0D6", "3D0", "3D6x0"])
    def test_parse_rejects_malformed_notation(self, notation):
        """Test unsupported notation raises DiceNotationError."""
        with pytest.raises(DiceNotationError) as exc_info:
            parse_notation(notation)
        assert exc_info.value.notation == notation

    def test_notation_error_is_configuration_error(self):
        """Test notation errors are catalog defects."""
        with pytest.raises(ConfigurationError):
            parse_notation("lots of dice")


class TestRollDetailed:
    """Test detailed rolls and their steps."""

    def test_roll_detailed_multiplied(self, scripted_dice):
        """Test 3D6x5 records every die, the sum and the scaled result."""
        detail = scripted_dice(1, 2, 3).roll_detailed("3D6x5")

        assert detail.rolls == [1, 2, 3]
        assert detail.subtotal == 6
        assert detail.total == 30
        assert detail.multiplier == 5
        assert detail.steps == ["3D6: [1, 2, 3]", "Sum: 6", "x5 => 30"]

    def test_roll_detailed_with_addition(self, scripted_dice):
        """Test (2D6+6)x5 adds before multiplying."""
        detail = scripted_dice(6, 6).roll_detailed("(2D6+6)x5")

        assert detail.add == 6
        assert detail.subtotal == 18
        assert detail.total == 90
        assert detail.steps[1] == "Sum: 12 + 6 = 18"

    def test_roll_without_multiplier_has_no_scaling_step(self, scripted_dice):
        """Test a plain roll only reports dice and sum."""
        detail = scripted_dice(4, 4).roll_detailed("2D6")
        assert detail.total == 8
        assert len(detail.steps) == 2

    def test_roll_returns_total(self, scripted_dice):
        """Test roll() returns the total only."""
        assert scripted_dice(5, 5, 5).roll("3D6x5") == 75

    def test_percentile(self, scripted_dice):
        """Test percentile draws a single 1D100."""
        assert scripted_dice(42).percentile() == 42


class TestRollAttribute:
    """Test attribute rolls are clamped to [1, 99]."""

    def test_attribute_within_range_unchanged(self, scripted_dice):
        """Test an in-range roll is returned as is."""
        detail = scripted_dice(6, 6).roll_attribute_detailed("(2D6+6)x5")
        assert detail.total == 90
        assert not any("Clamped" in step for step in detail.steps)

    def test_attribute_clamped_to_maximum(self, scripted_dice):
        """Test a roll above 99 is clamped and the clamp is recorded."""
        detail = scripted_dice(6, 6, 6, 6).roll_attribute_detailed("4D6x5")
        assert detail.total == 99
        assert detail.subtotal == 24
        assert detail.steps[-1] == "Clamped to [1, 99] => 99"

    def test_roll_attribute_returns_value(self, scripted_dice):
        """Test roll_attribute returns the clamped total."""
        assert scripted_dice(6, 6, 6, 6).roll_attribute("4D6x5") == 99

    @pytest.mark.parametrize(("value", "expected"), [(-5, 1), (0, 1), (1, 1), (50, 50), (99, 99), (150, 99)])
    def test_clamp_attribute(self, value, expected):
        """Test clamping at both ends."""
        assert clamp_attribute(value) == expected


class TestRandomSource:
    """Test the injectable random source."""

    def test_seeded_rolls_are_reproducible(self):
        """Test two rollers with the same seed roll the same values."""
        first = DiceRoller(seed=7)
        second = DiceRoller(seed=7)
        assert [first.roll("3D6x5") for _ in range(10)] == [second.roll("3D6x5") for _ in range(10)]

    def test_random_instance_is_used(self):
        """Test a random.Random instance can be injected."""
        expected = random.Random(3)
        roller = DiceRoller(random.Random(3))
        assert roller.roll_dice(5, 6) == [expected.randint(1, 6) for _ in range(5)]

    def test_default_seed_comes_from_configuration(self, monkeypatch):
        """Test CREATION_DICE_SEED seeds the default source."""
        monkeypatch.setenv("CREATION_DICE_SEED", "11")
        configured = DiceRoller()
        seeded = DiceRoller(seed=11)
        assert [configured.roll("1D100") for _ in range(5)] == [seeded.roll("1D100") for _ in range(5)]

    def test_rolls_stay_within_die_faces(self):
        """Test every die lands on one of its faces."""
        roller = DiceRoller(seed=99)
        for _ in range(200):
            assert all(1 <= roll <= 6 for roll in roller.roll_dice(3, 6))
