"""
Catalog models consumed by the rules engine.

Catalogs arrive already validated by an upstream schema layer. These models
give that data a typed, immutable shape; they hold no behaviour beyond simple
lookups. Every numeric threshold the rules depend on (age bands, tables,
caps) is catalog data rather than a constant in the engine.
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .attributes import Attributes, AttributeType

_FROZEN = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


class AgeBandKind(str, Enum):
    """Which set of age effects a band applies."""

    YOUTH = "youth"
    ADULT = "adult"
    MATURE = "mature"


class AgeBand(BaseModel):
    """One row of the age rules table."""

    model_config = _FROZEN

    min_age: int = Field(ge=0)
    max_age: int = Field(ge=0)
    kind: AgeBandKind
    penalty_total: int = Field(default=0, ge=0, description="Points the player must distribute as deductions")
    education_penalty: int = Field(default=0, ge=0)
    appearance_penalty: int = Field(default=0, ge=0)
    luck_rolls: int = Field(default=1, ge=1, description="Luck is rolled this many times, keeping the best")
    education_improvement_checks: int = Field(default=0, ge=0)
    effects: list[str] = Field(default_factory=list, description="Human-readable summary of the band's rules")

    @model_validator(mode="after")
    def validate_range(self) -> "AgeBand":
        if self.max_age < self.min_age:
            raise ValueError(f"Age band max_age {self.max_age} is below min_age {self.min_age}")
        return self

    def contains(self, age: int) -> bool:
        return self.min_age <= age <= self.max_age


class EducationImprovementRule(BaseModel):
    """How an education improvement check is rolled."""

    model_config = _FROZEN

    check_die: str = "1D100"
    improvement_die: str = "1D10"
    cap: int = 99


Comparison = Literal["lt", "gt", "any"]


class MoveRateRule(BaseModel):
    """A move rate condition comparing STR and DEX against SIZ."""

    model_config = _FROZEN

    value: int
    strength_vs_size: Comparison = "any"
    dexterity_vs_size: Comparison = "any"
    description: str = ""

    @staticmethod
    def _compare(value: int, size: int, comparison: Comparison) -> bool:
        if comparison == "lt":
            return value < size
        if comparison == "gt":
            return value > size
        return True

    def matches(self, attributes: Attributes) -> bool:
        return self._compare(attributes.strength, attributes.size, self.strength_vs_size) and self._compare(
            attributes.dexterity, attributes.size, self.dexterity_vs_size
        )


class BuildDamageRow(BaseModel):
    """One inclusive STR+SIZ range of the build and damage bonus table."""

    model_config = _FROZEN

    min: int
    max: int
    damage_bonus: str
    build: int


class BuildOverflowRule(BaseModel):
    """Extrapolation beyond the top row: each started step adds one build and one die."""

    model_config = _FROZEN

    threshold: int = 524
    step: int = Field(default=80, ge=1)
    base_build: int = 6
    base_dice: int = 5
    die: str = "D6"


class DerivedStatRules(BaseModel):
    """Tables for move rate and build/damage bonus."""

    model_config = _FROZEN

    move_rate: list[MoveRateRule]
    move_age_penalty_by_decade: dict[int, int] = Field(default_factory=dict)
    move_rate_floor: int = 1
    build_and_damage_bonus: list[BuildDamageRow]
    overflow: BuildOverflowRule = Field(default_factory=BuildOverflowRule)


class FractionRules(BaseModel):
    """Divisors for hard and extreme success thresholds."""

    model_config = _FROZEN

    hard_divisor: int = Field(default=2, ge=1)
    extreme_divisor: int = Field(default=5, ge=1)


class SkillPointRules(BaseModel):
    """Skill point budgets and ceilings."""

    model_config = _FROZEN

    personal_interest_formula: str = "INT x2"
    cannot_allocate_to: list[str] = Field(default_factory=lambda: ["Cthulhu Mythos"])
    credit_skill: str = "Credit Rating"
    creation_cap: int = 75
    absolute_cap: int = 99


class RulesCatalog(BaseModel):
    """Core creation rules: generation, age, derived stats, skill points."""

    model_config = _FROZEN

    version: str
    attribute_generation: dict[AttributeType, str]
    age_bands: list[AgeBand]
    education_improvement: EducationImprovementRule = Field(default_factory=EducationImprovementRule)
    derived_stats: DerivedStatRules
    skill_points: SkillPointRules = Field(default_factory=SkillPointRules)
    fractions: FractionRules = Field(default_factory=FractionRules)

    @field_validator("attribute_generation")
    @classmethod
    def validate_generation(cls, v: dict[AttributeType, str]) -> dict[AttributeType, str]:
        missing = [attribute.value for attribute in AttributeType if attribute not in v]
        if missing:
            raise ValueError(f"attribute_generation is missing {missing}")
        return v

    def band_for_age(self, age: int) -> AgeBand | None:
        """
        Return the first band containing the age.

        Ages past the table use the oldest band; ages below it have no band.
        """
        for band in self.age_bands:
            if band.contains(age):
                return band
        if self.age_bands and age > self.max_age:
            return max(self.age_bands, key=lambda band: band.min_age)
        return None

    def required_youth_total(self, age: int) -> int:
        band = self.band_for_age(age)
        return band.penalty_total if band and band.kind is AgeBandKind.YOUTH else 0

    def required_mature_total(self, age: int) -> int:
        band = self.band_for_age(age)
        return band.penalty_total if band and band.kind is AgeBandKind.MATURE else 0

    @property
    def min_age(self) -> int:
        return min(band.min_age for band in self.age_bands)

    @property
    def max_age(self) -> int:
        return max(band.max_age for band in self.age_bands)


class SkillSpecialization(BaseModel):
    """A concrete specialization of a skill family, e.g. Firearms (Handgun)."""

    model_config = _FROZEN

    name: str
    base: int | None = Field(default=None, description="Base value; None uses the family's base")
    aliases: list[str] = Field(default_factory=list)


class SkillDefinition(BaseModel):
    """
    A catalog skill and its innate base value.

    The base is either a fixed integer or attribute // base_divisor. A generic
    skill is a placeholder: allocation lists that name it expand to its
    specializations and the placeholder itself is never an allocation target.
    """

    model_config = _FROZEN

    name: str
    base: int = Field(default=0, ge=0)
    base_attribute: AttributeType | None = None
    base_divisor: int = Field(default=1, ge=1)
    specializations: list[SkillSpecialization] = Field(default_factory=list)
    generic: bool = False
    aliases: list[str] = Field(default_factory=list)


class SkillCatalog(BaseModel):
    """The list of investigator skills."""

    model_config = _FROZEN

    version: str
    skills: list[SkillDefinition]
    wildcard_word: str = Field(default="any", description="Word marking 'any skill' or 'any specialization' entries")

    def names(self) -> list[str]:
        """Every allocatable skill name, generic placeholders replaced by their specializations."""
        result: list[str] = []
        for skill in self.skills:
            if skill.generic and skill.specializations:
                result.extend(specialization.name for specialization in skill.specializations)
            else:
                result.append(skill.name)
        return result


class CreditRange(BaseModel):
    """Inclusive credit rating range for an occupation."""

    model_config = _FROZEN

    min: int = Field(ge=0)
    max: int = Field(le=99)

    @model_validator(mode="before")
    @classmethod
    def parse_range_string(cls, data):
        """Accept the catalog's "9-30" shorthand."""
        if isinstance(data, str):
            low, _, high = data.partition("-")
            return {"min": int(low.strip()), "max": int(high.strip())}
        return data

    def contains(self, value: int) -> bool:
        return self.min <= value <= self.max


class ChoiceGroup(BaseModel):
    """A set of skills from which an occupation picks a fixed count."""

    model_config = _FROZEN

    count: int = Field(ge=1)
    options: list[str] = Field(alias="from")
    label: str


class Occupation(BaseModel):
    """An occupation with its skill list and skill point formula."""

    model_config = _FROZEN

    name: str
    tags: list[str] = Field(default_factory=list)
    credit_range: CreditRange
    points_formula: str
    skills: list[str] = Field(default_factory=list)
    choice_groups: list[ChoiceGroup] = Field(default_factory=list)


class OccupationCatalog(BaseModel):
    """The list of occupations."""

    model_config = _FROZEN

    version: str
    interpersonal_skill_options: list[str] = Field(default_factory=list)
    occupations: list[Occupation]

    def get(self, name: str) -> Occupation | None:
        """Find an occupation by exact name, then case-insensitively."""
        for occupation in self.occupations:
            if occupation.name == name:
                return occupation
        folded = name.strip().casefold()
        for occupation in self.occupations:
            if occupation.name.casefold() == folded:
                return occupation
        return None


class CreationCatalog(BaseModel):
    """Everything the engine reads: rules, skills and occupations."""

    model_config = _FROZEN

    rules: RulesCatalog
    skills: SkillCatalog
    occupations: OccupationCatalog
