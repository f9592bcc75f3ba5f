"""
Draft snapshot models.

A Draft is the caller-owned aggregate describing an investigator under
construction. The engine reads it and never mutates it; every model here is
frozen so a draft passed to the engine is a value snapshot.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..config import get_config
from .attributes import AgePenaltyAllocation, Attributes

CreationMode = Literal["random", "manual"]


class OccupationSelection(BaseModel):
    """The player's occupation and the picks made inside it."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    credit_rating: int = Field(default=0, ge=0)
    selected_skills: list[str] = Field(default_factory=list)
    selected_choices: dict[str, list[str]] = Field(
        default_factory=dict, description="Choice-group key ('<index>:<label>') to the skills picked in it"
    )
    formula_choices: dict[str, str] = Field(
        default_factory=dict, description="Formula group index to alternative identifier, e.g. {'0': 'STRX2'}"
    )

    @field_validator("formula_choices", mode="before")
    @classmethod
    def stringify_keys(cls, v):
        """Group indexes may be given as ints; store them as strings."""
        if isinstance(v, dict):
            return {str(key): value for key, value in v.items()}
        return v


class SkillAllocation(BaseModel):
    """Points assigned to skills from the occupation and personal interest budgets."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    occupation: dict[str, int] = Field(default_factory=dict)
    personal: dict[str, int] = Field(default_factory=dict)

    @field_validator("occupation", "personal")
    @classmethod
    def validate_points(cls, v: dict[str, int]) -> dict[str, int]:
        negative = [name for name, points in v.items() if points < 0]
        if negative:
            raise ValueError(f"Skill points must be non-negative: {negative}")
        return v


class Background(BaseModel):
    """Narrative background. At least three categories plus a core connection are required."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    personal_description: str = ""
    ideology_beliefs: str = ""
    significant_people: str = ""
    meaningful_locations: str = ""
    treasured_possessions: str = ""
    traits: str = ""
    core_connection: str = ""

    def completed_categories(self) -> int:
        """Count the background categories with non-blank text (the core connection is not a category)."""
        categories = (
            self.personal_description,
            self.ideology_beliefs,
            self.significant_people,
            self.meaningful_locations,
            self.treasured_possessions,
            self.traits,
        )
        return sum(1 for value in categories if value.strip())


class Identity(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = ""
    gender: str = ""
    residence: str = ""
    birthplace: str = ""
    portrait_url: str | None = None


class Companion(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    character: str = ""
    player: str = ""
    summary: str = ""


class Equipment(BaseModel):
    """Money and possessions, filled in from the credit rating's spending band."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    spending_level: str = ""
    cash: str = ""
    assets: str = ""
    items: list[str] = Field(default_factory=list)
    notes: str = ""


class Draft(BaseModel):
    """
    An investigator under construction.

    ``attributes`` stays None until every attribute has been rolled or entered.
    ``last_rolled_age`` records the age used for the most recent random roll so
    that a later age change can be flagged.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    mode: CreationMode = Field(default_factory=lambda: get_config().engine.default_mode)
    age: int
    last_rolled_age: int | None = None
    era: str | None = None
    age_penalty_allocation: AgePenaltyAllocation = Field(default_factory=AgePenaltyAllocation)
    attributes: Attributes | None = None
    occupation: OccupationSelection | None = None
    skills: SkillAllocation = Field(default_factory=SkillAllocation)
    background: Background = Field(default_factory=Background)
    identity: Identity = Field(default_factory=Identity)
    companions: list[Companion] = Field(default_factory=list)
    equipment: Equipment = Field(default_factory=Equipment)
