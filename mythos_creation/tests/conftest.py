"""
Test configuration and fixtures for the creation rules engine.

Dice are scripted so every roll in a test is known in advance.
"""

# pylint: disable=redefined-outer-name
# Justification: pytest fixtures redefine names

from collections.abc import Callable, Iterable

import pytest
import structlog

from mythos_creation.config import reset_config
from mythos_creation.game.dice import DiceRoller
from mythos_creation.models import (
    AgePenaltyAllocation,
    Attributes,
    Background,
    Draft,
    Equipment,
    Identity,
    OccupationSelection,
    SkillAllocation,
)
from mythos_creation.rules_data import get_default_catalog
from mythos_creation.structured_logging.logging_config import reset_logging_state


class ScriptedRandom:
    """A random source that returns a fixed sequence of values."""

    def __init__(self, values: Iterable[int]) -> None:
        self._values = list(values)
        self.calls: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        if not self._values:
            raise AssertionError(f"Scripted dice exhausted (asked for randint({a}, {b}))")
        value = self._values.pop(0)
        if not a <= value <= b:
            raise AssertionError(f"Scripted value {value} outside randint({a}, {b})")
        return value

    @property
    def remaining(self) -> int:
        return len(self._values)


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """Keep engine settings from the host environment out of tests."""
    for name in (
        "CREATION_DICE_SEED",
        "CREATION_DEFAULT_MODE",
        "CREATION_STRICT_FORMULA_CHOICES",
        "LOGGING_LEVEL",
        "LOGGING_FORMAT",
        "LOGGING_ENVIRONMENT",
        "LOGGING_DISABLE_LOGGING",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()
    reset_logging_state()
    structlog.reset_defaults()


@pytest.fixture
def scripted_dice() -> Callable[..., DiceRoller]:
    """Factory building a DiceRoller that returns the given values in order."""

    def _make(*values: int) -> DiceRoller:
        return DiceRoller(ScriptedRandom(values))

    return _make


@pytest.fixture
def catalog():
    """The built-in classic-era catalog."""
    return get_default_catalog()


@pytest.fixture
def sample_attributes() -> Attributes:
    """A typical adult investigator."""
    return Attributes(
        strength=60,
        constitution=55,
        size=65,
        dexterity=55,
        appearance=45,
        intelligence=70,
        power=50,
        education=80,
        luck=50,
    )


@pytest.fixture
def police_selection() -> OccupationSelection:
    """Police Officer with the default picks and a credit rating of 20."""
    return OccupationSelection(
        name="Police Officer",
        credit_rating=20,
        selected_choices={
            "0:Interpersonal skill": ["Charm"],
            "1:Driving or riding": ["Drive Auto"],
        },
    )


@pytest.fixture
def police_skills() -> SkillAllocation:
    """
    Allocation spending the Police Officer budget exactly.

    Occupation: EDU x2 + STR x2 = 280, minus credit 20 leaves 260.
    Personal: INT x2 = 140.
    """
    return SkillAllocation(
        occupation={
            "Fighting (Brawl)": 40,
            "Firearms (Handgun)": 40,
            "First Aid": 30,
            "Law": 50,
            "Psychology": 50,
            "Spot Hidden": 40,
            "Charm": 10,
            "Credit Rating": 20,
        },
        personal={
            "Drive Auto": 40,
            "Library Use": 50,
            "Dodge": 30,
            "History": 20,
        },
    )


@pytest.fixture
def complete_draft(sample_attributes, police_selection, police_skills) -> Draft:
    """A draft with every step filled in and no issues."""
    return Draft(
        mode="random",
        age=27,
        last_rolled_age=27,
        era="1920s",
        age_penalty_allocation=AgePenaltyAllocation(),
        attributes=sample_attributes,
        occupation=police_selection,
        skills=police_skills,
        background=Background(
            personal_description="Broad-shouldered, with a crooked nose",
            ideology_beliefs="The law protects the weak",
            significant_people="Sergeant O'Malley, a mentor from the academy",
            core_connection="Sergeant O'Malley",
        ),
        identity=Identity(name="Thomas Reilly", residence="Arkham", birthplace="Boston"),
        equipment=Equipment(
            spending_level="Average",
            cash="$40",
            assets="$1,000",
            notes=".38 revolver, notebook, flashlight",
        ),
    )
