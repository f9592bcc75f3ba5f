"""
Tests for the attribute, catalog, draft and issue models.
"""

# pylint: disable=redefined-outer-name
# Justification: pytest fixtures redefine names

import pytest
from pydantic import ValidationError

from mythos_creation.models import (
    AgeBand,
    AgeBandKind,
    AgePenaltyAllocation,
    AttributeType,
    Background,
    ChoiceGroup,
    CreditRange,
    Draft,
    Issue,
    OccupationSelection,
    SkillAllocation,
    attribute_from_token,
    has_errors,
    issue_codes,
)


class TestAttributes:
    """Test the attribute set and token lookup."""

    @pytest.mark.parametrize(
        ("token", "expected"),
        [
            ("STR", AttributeType.STR),
            ("fue", AttributeType.STR),
            ("DES", AttributeType.DEX),
            ("APA", AttributeType.APP),
            ("TAM", AttributeType.SIZ),
            ("POD", AttributeType.POW),
            ("Suerte", AttributeType.LUCK),
            ("education", AttributeType.EDU),
            (" INT ", AttributeType.INT),
        ],
    )
    def test_attribute_from_token(self, token, expected):
        """Test English and Spanish abbreviations and full names."""
        assert attribute_from_token(token) is expected

    @pytest.mark.parametrize("token", ["", "SAN", "HP", "x"])
    def test_unknown_tokens(self, token):
        """Test tokens that name no attribute."""
        assert attribute_from_token(token) is None

    def test_get_and_as_dict(self, sample_attributes):
        """Test access by AttributeType in declaration order."""
        assert sample_attributes.get(AttributeType.EDU) == 80
        assert list(sample_attributes.as_dict()) == list(AttributeType)

    def test_with_values_returns_copy(self, sample_attributes):
        """Test replacing values leaves the original untouched."""
        changed = sample_attributes.with_values({AttributeType.STR: 20})
        assert changed.strength == 20
        assert sample_attributes.strength == 60

    def test_out_of_range(self, sample_attributes):
        """Test values outside [1, 99] are listed without being rejected."""
        changed = sample_attributes.with_values({AttributeType.CON: 0, AttributeType.LUCK: 100})
        assert changed.out_of_range() == [AttributeType.CON, AttributeType.LUCK]
        assert sample_attributes.out_of_range() == []

    def test_attributes_are_frozen(self, sample_attributes):
        """Test attributes cannot be changed in place."""
        with pytest.raises(ValidationError):
            sample_attributes.strength = 10


class TestAgePenaltyAllocation:
    """Test the penalty distribution model."""

    def test_totals(self):
        """Test the youth and mature totals."""
        allocation = AgePenaltyAllocation(youth_strength=1, youth_size=4, mature_strength=2, mature_dexterity=3)
        assert allocation.youth_total == 5
        assert allocation.mature_total == 5

    def test_negative_rejected(self):
        """Test deductions cannot be negative."""
        with pytest.raises(ValidationError):
            AgePenaltyAllocation(mature_strength=-1)

    @pytest.mark.parametrize(
        ("mature_total", "expected"),
        [(5, (1, 1, 3)), (10, (3, 3, 4)), (20, (6, 6, 8)), (40, (13, 13, 14)), (80, (26, 26, 28))],
    )
    def test_split_evenly_mature(self, mature_total, expected):
        """Test the remainder goes to DEX."""
        allocation = AgePenaltyAllocation.split_evenly(0, mature_total)
        assert (
            allocation.mature_strength,
            allocation.mature_constitution,
            allocation.mature_dexterity,
        ) == expected
        assert allocation.mature_total == mature_total

    def test_split_evenly_youth(self):
        """Test the remainder goes to SIZ."""
        allocation = AgePenaltyAllocation.split_evenly(5, 0)
        assert (allocation.youth_strength, allocation.youth_size) == (2, 3)


class TestCatalogModels:
    """Test catalog model parsing and lookups."""

    def test_credit_range_shorthand(self):
        """Test "9-30" parses into an inclusive range."""
        credit = CreditRange.model_validate("9-30")
        assert (credit.min, credit.max) == (9, 30)
        assert credit.contains(9)
        assert credit.contains(30)
        assert not credit.contains(31)

    def test_credit_range_bounds(self):
        """Test ranges past 99 are rejected."""
        with pytest.raises(ValidationError):
            CreditRange.model_validate("50-120")

    def test_choice_group_from_alias(self):
        """Test catalog data uses "from" for the options."""
        group = ChoiceGroup.model_validate({"count": 1, "from": ["Charm", "Persuade"], "label": "Interpersonal"})
        assert group.options == ["Charm", "Persuade"]
        assert group.model_dump(by_alias=True)["from"] == ["Charm", "Persuade"]

    def test_choice_group_needs_a_pick(self):
        """Test a group must ask for at least one pick."""
        with pytest.raises(ValidationError):
            ChoiceGroup(count=0, options=["Charm"], label="Nothing")

    def test_age_band_range(self):
        """Test an inverted band is rejected."""
        with pytest.raises(ValidationError):
            AgeBand(min_age=40, max_age=30, kind=AgeBandKind.MATURE)

    @pytest.mark.parametrize(
        ("age", "kind", "youth", "mature"),
        [
            (15, AgeBandKind.YOUTH, 5, 0),
            (19, AgeBandKind.YOUTH, 5, 0),
            (20, AgeBandKind.ADULT, 0, 0),
            (40, AgeBandKind.MATURE, 0, 5),
            (69, AgeBandKind.MATURE, 0, 20),
            (89, AgeBandKind.MATURE, 0, 80),
        ],
    )
    def test_band_for_age(self, catalog, age, kind, youth, mature):
        """Test band lookup and required penalty totals."""
        rules = catalog.rules
        assert rules.band_for_age(age).kind is kind
        assert rules.required_youth_total(age) == youth
        assert rules.required_mature_total(age) == mature

    def test_ages_outside_bands(self, catalog):
        """Test ages below the table have no band and ages past it use the oldest."""
        rules = catalog.rules
        assert (rules.min_age, rules.max_age) == (15, 89)
        assert rules.band_for_age(14) is None
        assert rules.required_youth_total(14) == 0
        assert rules.band_for_age(90).min_age == 80
        assert rules.band_for_age(120).min_age == 80
        assert rules.required_mature_total(95) == 80

    def test_generation_must_cover_every_attribute(self, catalog):
        """Test a rules catalog missing an attribute's notation is rejected."""
        data = catalog.rules.model_dump()
        del data["attribute_generation"][AttributeType.LUCK]
        with pytest.raises(ValidationError):
            type(catalog.rules).model_validate(data)

    def test_occupation_lookup(self, catalog):
        """Test exact then case-insensitive occupation lookup."""
        assert catalog.occupations.get("Professor").name == "Professor"
        assert catalog.occupations.get("  doctor of MEDICINE ").name == "Doctor of Medicine"
        assert catalog.occupations.get("Astronaut") is None


class TestDraftModels:
    """Test the draft snapshot pieces."""

    def test_formula_choice_keys_become_strings(self):
        """Test integer group indexes are stored as strings."""
        selection = OccupationSelection(name="Police Officer", formula_choices={0: "STRX2"})
        assert selection.formula_choices == {"0": "STRX2"}

    def test_negative_credit_rejected(self):
        """Test the credit rating cannot be negative."""
        with pytest.raises(ValidationError):
            OccupationSelection(name="Police Officer", credit_rating=-1)

    def test_negative_skill_points_rejected(self):
        """Test skill points cannot be negative."""
        with pytest.raises(ValidationError):
            SkillAllocation(personal={"Dodge": -5})

    def test_background_categories(self):
        """Test blank categories and the core connection are not counted."""
        background = Background(
            personal_description="Tall",
            ideology_beliefs="   ",
            traits="Stubborn",
            core_connection="Sister",
        )
        assert background.completed_categories() == 2

    def test_draft_mode_defaults_from_configuration(self, monkeypatch):
        """Test CREATION_DEFAULT_MODE sets the mode of new drafts."""
        assert Draft(age=30).mode == "random"

        monkeypatch.setenv("CREATION_DEFAULT_MODE", "manual")

        assert Draft(age=30).mode == "manual"
        assert Draft(age=30, mode="random").mode == "random"

    def test_unknown_draft_fields_rejected(self):
        """Test extra fields are refused."""
        with pytest.raises(ValidationError):
            OccupationSelection(name="Police Officer", favourite_color="green")


class TestIssues:
    """Test the issue model and helpers."""

    def test_constructors(self):
        """Test the error and warning constructors."""
        error = Issue.error("CREDIT_RANGE", "Out of range", "occupation.credit_rating")
        warning = Issue.warning("AGE_RANGE", "Unusual age")

        assert error.is_error
        assert error.field == "occupation.credit_rating"
        assert not warning.is_error
        assert warning.field is None

    def test_helpers(self):
        """Test has_errors and issue_codes."""
        issues = [Issue.warning("AGE_RANGE", "Unusual age"), Issue.error("MISSING_CASH", "Fill in cash")]

        assert has_errors(issues)
        assert not has_errors(issues[:1])
        assert issue_codes(issues) == ["AGE_RANGE", "MISSING_CASH"]

    def test_unknown_severity_rejected(self):
        """Test only error and warning exist."""
        with pytest.raises(ValidationError):
            Issue(code="X", severity="info", message="Nope")
