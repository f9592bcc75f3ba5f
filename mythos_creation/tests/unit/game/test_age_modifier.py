"""
Tests for the age modifier.

Covers youth and mature band deductions, best-of Luck, education improvement
checks and the default penalty split.
"""

# pylint: disable=redefined-outer-name
# Justification: pytest fixtures redefine names

import random

import pytest

from mythos_creation.game.age_modifier import AgeModifier, default_penalty_allocation
from mythos_creation.game.dice import DiceRoller
from mythos_creation.models import AgePenaltyAllocation, AttributeType


class TestYouthBand:
    """Test ages 15-19."""

    def test_youth_deductions_applied_as_given(self, sample_attributes, scripted_dice):
        """Test STR/SIZ deductions and the EDU penalty."""
        modifier = AgeModifier(dice=scripted_dice(1, 1, 1))
        allocation = AgePenaltyAllocation(youth_strength=2, youth_size=3)

        adjusted = modifier.apply_age_modifiers(sample_attributes, 17, allocation)

        assert adjusted.strength == 58
        assert adjusted.size == 62
        assert adjusted.education == 75
        assert adjusted.constitution == sample_attributes.constitution

    def test_youth_luck_keeps_best_roll(self, sample_attributes, scripted_dice):
        """Test a higher second Luck roll replaces the first."""
        modifier = AgeModifier(dice=scripted_dice(6, 6, 6))

        adjusted = modifier.apply_age_modifiers(sample_attributes, 17, AgePenaltyAllocation(youth_strength=5))

        assert adjusted.luck == 90

    def test_youth_luck_ignores_worse_roll(self, sample_attributes, scripted_dice):
        """Test a lower second Luck roll is discarded."""
        modifier = AgeModifier(dice=scripted_dice(1, 1, 1))

        adjusted = modifier.apply_age_modifiers(sample_attributes, 17, AgePenaltyAllocation(youth_size=5))

        assert adjusted.luck == 50

    def test_youth_deductions_not_corrected(self, sample_attributes, scripted_dice):
        """Test a wrong total is applied as given, not silently fixed."""
        modifier = AgeModifier(dice=scripted_dice(1, 1, 1))

        adjusted = modifier.apply_age_modifiers(sample_attributes, 18, AgePenaltyAllocation(youth_strength=9))

        assert adjusted.strength == 51
        assert adjusted.size == 65

    def test_youth_steps_describe_changes(self, sample_attributes, scripted_dice):
        """Test the detailed variant reports each change."""
        modifier = AgeModifier(dice=scripted_dice(6, 6, 6))

        result = modifier.apply_age_modifiers_detailed(
            sample_attributes, 17, AgePenaltyAllocation(youth_strength=2, youth_size=3)
        )

        assert "Age 15-19 STR: -2 => 58" in result.steps
        assert "Age 15-19 SIZ: -3 => 62" in result.steps
        assert "Age 15-19 EDU: -5 => 75" in result.steps
        assert "Best LUCK: max(50, 90) => 90" in result.steps


class TestMatureBands:
    """Test ages 40 and above."""

    def test_mature_deductions_and_appearance(self, sample_attributes, scripted_dice):
        """Test STR/CON/DEX deductions and the APP penalty at 47."""
        modifier = AgeModifier(dice=scripted_dice(10, 10))
        allocation = AgePenaltyAllocation(mature_strength=2, mature_constitution=2, mature_dexterity=1)

        adjusted = modifier.apply_age_modifiers(sample_attributes, 47, allocation)

        assert adjusted.strength == 58
        assert adjusted.constitution == 53
        assert adjusted.dexterity == 54
        assert adjusted.appearance == 40

    @pytest.mark.parametrize(
        ("age", "appearance_penalty"),
        [(45, 5), (55, 10), (65, 15), (75, 20), (85, 25)],
    )
    def test_appearance_penalty_by_decade(self, sample_attributes, age, appearance_penalty):
        """Test APP loses the band's penalty in every mature decade."""
        modifier = AgeModifier(dice=DiceRoller(random.Random(0)))

        adjusted = modifier.apply_age_modifiers(sample_attributes, age, AgePenaltyAllocation())

        assert adjusted.appearance == sample_attributes.appearance - appearance_penalty

    def test_mature_deductions_can_go_below_one(self, sample_attributes, scripted_dice):
        """Test the modifier does not clamp low attributes."""
        weak = sample_attributes.with_values({AttributeType.DEX: 20})
        modifier = AgeModifier(dice=scripted_dice(1, 1, 1, 1))
        allocation = AgePenaltyAllocation(mature_strength=30, mature_constitution=20, mature_dexterity=30)

        adjusted = modifier.apply_age_modifiers(weak, 85, allocation)

        assert adjusted.dexterity == -10


class TestEducationImprovement:
    """Test EDU improvement checks."""

    def test_adult_single_check_improves(self, sample_attributes, scripted_dice):
        """Test a check above EDU adds the improvement die."""
        modifier = AgeModifier(dice=scripted_dice(90, 7))

        adjusted = modifier.apply_age_modifiers(sample_attributes, 27)

        assert adjusted.education == 87

    def test_adult_failed_check_leaves_education(self, sample_attributes, scripted_dice):
        """Test a check at or below EDU changes nothing."""
        modifier = AgeModifier(dice=scripted_dice(80))

        adjusted = modifier.apply_age_modifiers(sample_attributes, 27)

        assert adjusted.education == 80

    def test_improvement_capped_at_99(self, sample_attributes, scripted_dice):
        """Test two improvements at 47 stop at 99."""
        modifier = AgeModifier(dice=scripted_dice(81, 10, 95, 10))
        allocation = AgePenaltyAllocation(mature_strength=5)

        adjusted = modifier.apply_age_modifiers(sample_attributes, 47, allocation)

        assert adjusted.education == 99

    def test_improvement_steps(self, scripted_dice):
        """Test each check is described."""
        modifier = AgeModifier(dice=scripted_dice(90, 4, 20))

        result = modifier.improve_education_detailed(60, 2)

        assert result.value == 64
        assert result.steps == [
            "EDU improvement 1: 1D100=90 > 60, +1D10=4 => 64",
            "EDU improvement 2: 1D100=20 <= 64, no improvement",
        ]

    def test_education_never_decreases(self, sample_attributes):
        """Test EDU stays within [original, 99] for every adult age."""
        for seed in range(20):
            for age in range(20, 90, 7):
                modifier = AgeModifier(dice=DiceRoller(random.Random(seed)))
                original = sample_attributes.education

                adjusted = modifier.apply_age_modifiers(sample_attributes, age)

                assert original <= adjusted.education <= 99


class TestOutsideBands:
    """Test ages outside the table."""

    def test_no_effects_below_youngest_band(self, sample_attributes, scripted_dice):
        """Test attributes pass through unchanged and no dice are rolled."""
        modifier = AgeModifier(dice=scripted_dice())

        result = modifier.apply_age_modifiers_detailed(sample_attributes, 12, AgePenaltyAllocation())

        assert result.attributes == sample_attributes
        assert result.steps == []

    def test_oldest_band_applies_past_the_table(self, sample_attributes, scripted_dice):
        """Test a 95-year-old gets the 80+ deductions, APP penalty and four EDU checks."""
        modifier = AgeModifier(dice=scripted_dice(1, 1, 1, 1))
        allocation = AgePenaltyAllocation(mature_strength=30, mature_constitution=20, mature_dexterity=30)

        result = modifier.apply_age_modifiers_detailed(sample_attributes, 95, allocation)

        assert result.attributes.strength == 30
        assert result.attributes.constitution == 35
        assert result.attributes.dexterity == 25
        assert result.attributes.appearance == 20
        assert result.attributes.education == 80
        assert "Age 95 STR: -30 => 30" in result.steps
        assert sum(step.startswith("EDU improvement") for step in result.steps) == 4

    def test_default_allocation_past_the_table(self):
        """Test the required total past the table is the oldest band's."""
        assert default_penalty_allocation(95).mature_total == 80

    def test_input_is_not_mutated(self, sample_attributes, scripted_dice):
        """Test the raw attributes are left as they were."""
        before = sample_attributes.model_dump()
        AgeModifier(dice=scripted_dice(1, 1, 1)).apply_age_modifiers(
            sample_attributes, 17, AgePenaltyAllocation(youth_strength=5)
        )
        assert sample_attributes.model_dump() == before


class TestDefaultPenaltyAllocation:
    """Test the even split of required totals."""

    def test_youth_split(self):
        """Test the youth total of 5 splits between STR and SIZ."""
        allocation = default_penalty_allocation(17)
        assert allocation.youth_strength == 2
        assert allocation.youth_size == 3
        assert allocation.mature_total == 0

    @pytest.mark.parametrize(("age", "total"), [(30, 0), (45, 5), (55, 10), (65, 20), (75, 40), (85, 80)])
    def test_mature_totals(self, age, total):
        """Test the split always adds up to the band's required total."""
        allocation = default_penalty_allocation(age)
        assert allocation.mature_total == total
        assert allocation.youth_total == 0

    def test_apply_without_allocation_uses_default(self, sample_attributes, scripted_dice):
        """Test an omitted allocation falls back to the even split."""
        modifier = AgeModifier(dice=scripted_dice(1, 1))

        adjusted = modifier.apply_age_modifiers(sample_attributes, 45)

        assert adjusted.strength == 59
        assert adjusted.constitution == 54
        assert adjusted.dexterity == 52
