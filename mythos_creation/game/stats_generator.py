"""
Attribute generation for investigator creation.

Rolls each attribute with the notation the catalog declares for it, either as
a full set or one attribute at a time, optionally followed by age effects.
"""

from ..models.attributes import AgePenaltyAllocation, Attributes, AttributeType
from ..models.catalog import CreationCatalog
from ..models.results import AgeAdjustment, DetailedValue
from ..rules_data import get_default_catalog
from ..structured_logging.logging_config import get_logger
from .age_modifier import AgeModifier, default_penalty_allocation
from .dice import DiceRoller

logger = get_logger(__name__)


class StatsGenerator:
    """Service for rolling investigator attributes."""

    def __init__(self, catalog: CreationCatalog | None = None, dice: DiceRoller | None = None) -> None:
        """
        Initialize the stats generator.

        Args:
            catalog: Creation catalog (the built-in default when omitted)
            dice: Dice roller; share one with other services to keep a single random sequence
        """
        self.catalog = catalog or get_default_catalog()
        self.dice = dice or DiceRoller()
        self.age_modifier = AgeModifier(self.catalog, self.dice)

    def notation_for(self, attribute: AttributeType) -> str:
        return self.catalog.rules.attribute_generation[attribute]

    def roll_attribute_detailed(self, attribute: AttributeType) -> DetailedValue:
        """Roll a single attribute from its catalog notation, clamped to [1, 99]."""
        detail = self.dice.roll_attribute_detailed(self.notation_for(attribute))
        return DetailedValue(value=detail.total, steps=detail.steps)

    def roll_attribute(self, attribute: AttributeType) -> int:
        return self.roll_attribute_detailed(attribute).value

    def roll_attributes(self) -> Attributes:
        """
        Roll all nine attributes.

        Returns:
            Attributes: A new set with every value rolled from the catalog notation
        """
        values = {attribute.value: self.roll_attribute(attribute) for attribute in AttributeType}
        attributes = Attributes(**values)
        logger.debug("Attributes rolled", attributes=attributes.model_dump())
        return attributes

    def roll_attribute_with_age_modifiers_detailed(
        self,
        attribute: AttributeType,
        age: int,
        allocation: AgePenaltyAllocation | None = None,
    ) -> DetailedValue:
        """
        Roll one attribute and apply the age effects that touch it.

        Used when a player re-rolls a single attribute after choosing an age.
        """
        if allocation is None:
            allocation = default_penalty_allocation(age, self.catalog)
        rolled = self.roll_attribute_detailed(attribute)
        adjusted = self.age_modifier.adjust_attribute_detailed(attribute, rolled.value, age, allocation)
        return DetailedValue(value=adjusted.value, steps=[*rolled.steps, *adjusted.steps])

    def roll_attribute_with_age_modifiers(
        self,
        attribute: AttributeType,
        age: int,
        allocation: AgePenaltyAllocation | None = None,
    ) -> int:
        return self.roll_attribute_with_age_modifiers_detailed(attribute, age, allocation).value

    def roll_attributes_with_age_modifiers(
        self,
        age: int,
        allocation: AgePenaltyAllocation | None = None,
    ) -> AgeAdjustment:
        """Roll a full set, then apply the age modifier to it."""
        raw = self.roll_attributes()
        adjustment = self.age_modifier.apply_age_modifiers_detailed(raw, age, allocation)
        logger.info("Investigator attributes generated", age=age, attributes=adjustment.attributes.model_dump())
        return adjustment
