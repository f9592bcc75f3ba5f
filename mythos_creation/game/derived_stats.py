"""
Derived statistics.

Pure functions of the final attributes (and age, for move rate). Table-driven
values come from the catalog's derived-stat rules.
"""

import math

from ..models.attributes import Attributes
from ..models.catalog import CreationCatalog, DerivedStatRules
from ..models.results import AttributeFractions, DerivedStats
from ..rules_data import get_default_catalog

MOVE_RATE_FLOOR = 1


def hit_points(attributes: Attributes) -> int:
    return (attributes.constitution + attributes.size) // 10


def magic_points(attributes: Attributes) -> int:
    return attributes.power // 5


def starting_sanity(attributes: Attributes) -> int:
    return attributes.power


def _age_penalty(rules: DerivedStatRules, age: int) -> int:
    """Penalty of the highest catalog decade at or below the age."""
    applicable = [decade for decade in rules.move_age_penalty_by_decade if decade <= age]
    if not applicable:
        return 0
    return rules.move_age_penalty_by_decade[max(applicable)]


def move_rate(attributes: Attributes, age: int, catalog: CreationCatalog | None = None) -> int:
    """
    Compute the movement rate.

    The first matching condition of the catalog table gives the base rate;
    the age-decade penalty is then subtracted. The result is never below 1.

    Args:
        attributes: Final attributes
        age: Investigator age
        catalog: Creation catalog (built-in default when omitted)

    Returns:
        int: Movement rate
    """
    rules = (catalog or get_default_catalog()).rules.derived_stats
    base = next((rule.value for rule in rules.move_rate if rule.matches(attributes)), rules.move_rate[-1].value)
    floor = max(MOVE_RATE_FLOOR, rules.move_rate_floor)
    return max(floor, base - _age_penalty(rules, age))


def build_and_damage_bonus(attributes: Attributes, catalog: CreationCatalog | None = None) -> tuple[int, str]:
    """
    Look up build and damage bonus from STR + SIZ.

    Above the top row, the overflow rule adds one build and one die for every
    started step over the threshold. Below the first row, the first row applies.

    Returns:
        tuple[int, str]: (build, damage bonus expression)
    """
    rules = (catalog or get_default_catalog()).rules.derived_stats
    total = attributes.strength + attributes.size
    rows = sorted(rules.build_and_damage_bonus, key=lambda row: row.min)

    for row in rows:
        if row.min <= total <= row.max:
            return row.build, row.damage_bonus

    overflow = rules.overflow
    if total > rows[-1].max:
        extra = math.ceil((total - overflow.threshold) / overflow.step)
        return overflow.base_build + extra, f"+{overflow.base_dice + extra}{overflow.die}"

    below = [row for row in rows if row.min <= total]
    row = below[-1] if below else rows[0]
    return row.build, row.damage_bonus


def hard_value(value: int, catalog: CreationCatalog | None = None) -> int:
    return value // (catalog or get_default_catalog()).rules.fractions.hard_divisor


def extreme_value(value: int, catalog: CreationCatalog | None = None) -> int:
    return value // (catalog or get_default_catalog()).rules.fractions.extreme_divisor


def attribute_fractions(attributes: Attributes, catalog: CreationCatalog | None = None) -> AttributeFractions:
    """Hard and extreme thresholds for every attribute."""
    values = attributes.as_dict()
    return AttributeFractions(
        hard={attribute: hard_value(value, catalog) for attribute, value in values.items()},
        extreme={attribute: extreme_value(value, catalog) for attribute, value in values.items()},
    )


def compute_derived_stats(attributes: Attributes, age: int, catalog: CreationCatalog | None = None) -> DerivedStats:
    """Compute every derived statistic for a final attribute set."""
    build, damage_bonus = build_and_damage_bonus(attributes, catalog)
    return DerivedStats(
        hit_points=hit_points(attributes),
        magic_points=magic_points(attributes),
        sanity=starting_sanity(attributes),
        move_rate=move_rate(attributes, age, catalog),
        build=build,
        damage_bonus=damage_bonus,
    )
