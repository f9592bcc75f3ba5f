"""
Result models returned by the rules engine.

These are plain immutable value objects: roll breakdowns, derived statistics,
per-skill totals, formula evaluations and the finished character sheet.
"""

from pydantic import BaseModel, ConfigDict, Field

from .attributes import Attributes, AttributeType
from .draft import Background, Companion, Equipment, Identity, OccupationSelection, SkillAllocation


class RollDetail(BaseModel):
    """A dice roll together with the steps that produced it."""

    model_config = ConfigDict(frozen=True)

    formula: str
    rolls: list[int]
    add: int = 0
    multiplier: int = 1
    subtotal: int
    total: int
    steps: list[str] = Field(default_factory=list)


class DetailedValue(BaseModel):
    """A computed value and the human-readable steps behind it."""

    model_config = ConfigDict(frozen=True)

    value: int
    steps: list[str] = Field(default_factory=list)


class AgeAdjustment(BaseModel):
    """Attributes after age effects, with the steps applied."""

    model_config = ConfigDict(frozen=True)

    attributes: Attributes
    steps: list[str] = Field(default_factory=list)


class DerivedStats(BaseModel):
    """Statistics computed from the final attributes."""

    model_config = ConfigDict(frozen=True)

    hit_points: int
    magic_points: int
    sanity: int
    move_rate: int
    build: int
    damage_bonus: str


class AttributeFractions(BaseModel):
    """Hard and extreme thresholds for each attribute."""

    model_config = ConfigDict(frozen=True)

    hard: dict[AttributeType, int]
    extreme: dict[AttributeType, int]


class ComputedSkill(BaseModel):
    """A skill's base, allocated points and success thresholds."""

    model_config = ConfigDict(frozen=True)

    base: int
    occupation: int = 0
    personal: int = 0
    total: int
    hard: int
    extreme: int


class FormulaEvaluation(BaseModel):
    """Total of an occupation point formula and the alternative picked in each group."""

    model_config = ConfigDict(frozen=True)

    total: int
    choices: dict[int, str] = Field(default_factory=dict)


class FormulaChoiceGroup(BaseModel):
    """An alternative group of a formula as presented to a player."""

    model_config = ConfigDict(frozen=True)

    index: int
    key: str
    options: list[str]
    display: str


class FinanceSnapshot(BaseModel):
    """Spending band for a credit rating. Cash and assets are left for the player to fill in."""

    model_config = ConfigDict(frozen=True)

    spending_level: str
    cash: str = ""
    assets: str = ""


class CharacterSheet(BaseModel):
    """A finished investigator."""

    model_config = ConfigDict(frozen=True)

    mode: str
    age: int
    era: str | None = None
    attributes: Attributes
    derived_stats: DerivedStats
    fractions: AttributeFractions
    occupation: OccupationSelection
    skills: SkillAllocation
    computed_skills: dict[str, ComputedSkill]
    finance: FinanceSnapshot
    background: Background
    identity: Identity
    companions: list[Companion]
    equipment: Equipment
