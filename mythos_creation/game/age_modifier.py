"""
Age effects on raw attributes.

The catalog's age bands decide what happens at a given age:

- youth band: the player's STR/SIZ deductions, an EDU deduction and a best-of
  Luck roll
- mature bands: the player's STR/CON/DEX deductions and an APP deduction
- every band may grant EDU improvement checks

Deductions are applied exactly as allocated. Whether they add up to the
band's required total is a Step Validator concern, and attributes pushed
below 1 are left for validation to report.
"""

from ..models.attributes import AgePenaltyAllocation, Attributes, AttributeType
from ..models.catalog import AgeBand, AgeBandKind, CreationCatalog
from ..models.results import AgeAdjustment, DetailedValue
from ..rules_data import get_default_catalog
from ..structured_logging.logging_config import get_logger
from .dice import DiceRoller

logger = get_logger(__name__)

_ABBREVIATIONS = {
    AttributeType.STR: "STR",
    AttributeType.CON: "CON",
    AttributeType.SIZ: "SIZ",
    AttributeType.DEX: "DEX",
    AttributeType.APP: "APP",
    AttributeType.INT: "INT",
    AttributeType.POW: "POW",
    AttributeType.EDU: "EDU",
    AttributeType.LUCK: "LUCK",
}


def default_penalty_allocation(age: int, catalog: CreationCatalog | None = None) -> AgePenaltyAllocation:
    """Spread the age's required penalty totals evenly across the eligible attributes."""
    rules = (catalog or get_default_catalog()).rules
    return AgePenaltyAllocation.split_evenly(rules.required_youth_total(age), rules.required_mature_total(age))


class AgeModifier:
    """Applies age band effects to attributes."""

    def __init__(self, catalog: CreationCatalog | None = None, dice: DiceRoller | None = None) -> None:
        self.catalog = catalog or get_default_catalog()
        self.dice = dice or DiceRoller()

    def _band_label(self, band: AgeBand, age: int) -> str:
        if band.kind is AgeBandKind.YOUTH:
            return f"Age {band.min_age}-{band.max_age}"
        return f"Age {age}"

    def improve_education_detailed(self, education: int, checks: int) -> DetailedValue:
        """
        Run EDU improvement checks.

        Each check rolls the check die; a roll above the current EDU adds the
        improvement die, capped at the catalog cap. EDU is never lowered.
        """
        rule = self.catalog.rules.education_improvement
        value = education
        steps: list[str] = []
        for check in range(1, checks + 1):
            before = value
            roll = self.dice.roll(rule.check_die)
            if roll > before:
                gain = self.dice.roll(rule.improvement_die)
                value = max(before, min(rule.cap, before + gain))
                steps.append(
                    f"EDU improvement {check}: {rule.check_die}={roll} > {before}, "
                    f"+{rule.improvement_die}={gain} => {value}"
                )
            else:
                steps.append(f"EDU improvement {check}: {rule.check_die}={roll} <= {before}, no improvement")
        return DetailedValue(value=value, steps=steps)

    def adjust_attribute_detailed(
        self,
        attribute: AttributeType,
        value: int,
        age: int,
        allocation: AgePenaltyAllocation,
    ) -> DetailedValue:
        """Apply the age effects that touch a single attribute."""
        band = self.catalog.rules.band_for_age(age)
        if band is None:
            return DetailedValue(value=value, steps=[])

        label = self._band_label(band, age)
        name = _ABBREVIATIONS[attribute]
        steps: list[str] = []

        deductions: dict[AttributeType, int] = {}
        if band.kind is AgeBandKind.YOUTH:
            deductions = allocation.youth_deductions()
            if band.education_penalty:
                deductions[AttributeType.EDU] = band.education_penalty
        elif band.kind is AgeBandKind.MATURE:
            deductions = allocation.mature_deductions()
            if band.appearance_penalty:
                deductions[AttributeType.APP] = band.appearance_penalty

        deduction = deductions.get(attribute, 0)
        if deduction:
            value -= deduction
            steps.append(f"{label} {name}: -{deduction} => {value}")

        if attribute is AttributeType.LUCK and band.luck_rolls > 1:
            notation = self.catalog.rules.attribute_generation[AttributeType.LUCK]
            for attempt in range(2, band.luck_rolls + 1):
                reroll = self.dice.roll_attribute_detailed(notation)
                previous = value
                value = max(previous, reroll.total)
                steps.append(f"{label} LUCK roll {attempt}: {notation} => {reroll.total}")
                steps.append(f"Best LUCK: max({previous}, {reroll.total}) => {value}")

        if attribute is AttributeType.EDU and band.education_improvement_checks:
            improved = self.improve_education_detailed(value, band.education_improvement_checks)
            value = improved.value
            steps.extend(improved.steps)

        return DetailedValue(value=value, steps=steps)

    def apply_age_modifiers_detailed(
        self,
        attributes: Attributes,
        age: int,
        allocation: AgePenaltyAllocation | None = None,
    ) -> AgeAdjustment:
        """
        Apply every age effect to a full attribute set.

        Args:
            attributes: Raw rolled attributes (left untouched)
            age: Investigator age
            allocation: Player's penalty distribution; an even split when omitted

        Returns:
            AgeAdjustment: The adjusted attributes and the steps applied
        """
        if allocation is None:
            allocation = default_penalty_allocation(age, self.catalog)

        adjusted: dict[AttributeType, int] = {}
        steps: list[str] = []
        for attribute, value in attributes.as_dict().items():
            result = self.adjust_attribute_detailed(attribute, value, age, allocation)
            adjusted[attribute] = result.value
            steps.extend(result.steps)

        logger.debug("Age modifiers applied", age=age, steps=len(steps))
        return AgeAdjustment(attributes=attributes.with_values(adjusted), steps=steps)

    def apply_age_modifiers(
        self,
        attributes: Attributes,
        age: int,
        allocation: AgePenaltyAllocation | None = None,
    ) -> Attributes:
        return self.apply_age_modifiers_detailed(attributes, age, allocation).attributes
