"""
Core creation rules for the classic 1920s investigator.

Age bands, derived-stat tables and skill point rules as printed in the
7th-edition investigator handbook.
"""

from mythos_creation.models.attributes import AttributeType
from mythos_creation.models.catalog import (
    AgeBand,
    AgeBandKind,
    BuildDamageRow,
    BuildOverflowRule,
    DerivedStatRules,
    EducationImprovementRule,
    FractionRules,
    MoveRateRule,
    RulesCatalog,
    SkillPointRules,
)

ATTRIBUTE_GENERATION = {
    AttributeType.STR: "3D6x5",
    AttributeType.CON: "3D6x5",
    AttributeType.SIZ: "(2D6+6)x5",
    AttributeType.DEX: "3D6x5",
    AttributeType.APP: "3D6x5",
    AttributeType.INT: "(2D6+6)x5",
    AttributeType.POW: "3D6x5",
    AttributeType.EDU: "(2D6+6)x5",
    AttributeType.LUCK: "3D6x5",
}

AGE_BANDS = [
    AgeBand(
        min_age=15,
        max_age=19,
        kind=AgeBandKind.YOUTH,
        penalty_total=5,
        education_penalty=5,
        luck_rolls=2,
        effects=[
            "Deduct 5 points split between STR and SIZ",
            "Deduct 5 points from EDU",
            "Roll Luck twice and use the higher result",
        ],
    ),
    AgeBand(
        min_age=20,
        max_age=39,
        kind=AgeBandKind.ADULT,
        education_improvement_checks=1,
        effects=["Make one improvement check for EDU"],
    ),
    AgeBand(
        min_age=40,
        max_age=49,
        kind=AgeBandKind.MATURE,
        penalty_total=5,
        appearance_penalty=5,
        education_improvement_checks=2,
        effects=[
            "Make two improvement checks for EDU",
            "Deduct 5 points among STR, CON and DEX",
            "Reduce APP by 5",
        ],
    ),
    AgeBand(
        min_age=50,
        max_age=59,
        kind=AgeBandKind.MATURE,
        penalty_total=10,
        appearance_penalty=10,
        education_improvement_checks=3,
        effects=[
            "Make three improvement checks for EDU",
            "Deduct 10 points among STR, CON and DEX",
            "Reduce APP by 10",
        ],
    ),
    AgeBand(
        min_age=60,
        max_age=69,
        kind=AgeBandKind.MATURE,
        penalty_total=20,
        appearance_penalty=15,
        education_improvement_checks=4,
        effects=[
            "Make four improvement checks for EDU",
            "Deduct 20 points among STR, CON and DEX",
            "Reduce APP by 15",
        ],
    ),
    AgeBand(
        min_age=70,
        max_age=79,
        kind=AgeBandKind.MATURE,
        penalty_total=40,
        appearance_penalty=20,
        education_improvement_checks=4,
        effects=[
            "Make four improvement checks for EDU",
            "Deduct 40 points among STR, CON and DEX",
            "Reduce APP by 20",
        ],
    ),
    AgeBand(
        min_age=80,
        max_age=89,
        kind=AgeBandKind.MATURE,
        penalty_total=80,
        appearance_penalty=25,
        education_improvement_checks=4,
        effects=[
            "Make four improvement checks for EDU",
            "Deduct 80 points among STR, CON and DEX",
            "Reduce APP by 25",
        ],
    ),
]

DERIVED_STAT_RULES = DerivedStatRules(
    move_rate=[
        MoveRateRule(value=7, strength_vs_size="lt", dexterity_vs_size="lt", description="DEX and STR both below SIZ"),
        MoveRateRule(value=9, strength_vs_size="gt", dexterity_vs_size="gt", description="DEX and STR both above SIZ"),
        MoveRateRule(value=8, description="Any other combination"),
    ],
    move_age_penalty_by_decade={40: 1, 50: 2, 60: 3, 70: 4, 80: 5},
    build_and_damage_bonus=[
        BuildDamageRow(min=2, max=64, damage_bonus="-2", build=-2),
        BuildDamageRow(min=65, max=84, damage_bonus="-1", build=-1),
        BuildDamageRow(min=85, max=124, damage_bonus="0", build=0),
        BuildDamageRow(min=125, max=164, damage_bonus="+1D4", build=1),
        BuildDamageRow(min=165, max=204, damage_bonus="+1D6", build=2),
        BuildDamageRow(min=205, max=284, damage_bonus="+2D6", build=3),
        BuildDamageRow(min=285, max=364, damage_bonus="+3D6", build=4),
        BuildDamageRow(min=365, max=444, damage_bonus="+4D6", build=5),
        BuildDamageRow(min=445, max=524, damage_bonus="+5D6", build=6),
    ],
    overflow=BuildOverflowRule(threshold=524, step=80, base_build=6, base_dice=5, die="D6"),
)

CLASSIC_RULES = RulesCatalog(
    version="7e-classic-1",
    attribute_generation=ATTRIBUTE_GENERATION,
    age_bands=AGE_BANDS,
    education_improvement=EducationImprovementRule(check_die="1D100", improvement_die="1D10", cap=99),
    derived_stats=DERIVED_STAT_RULES,
    skill_points=SkillPointRules(
        personal_interest_formula="INT x2",
        cannot_allocate_to=["Cthulhu Mythos"],
        credit_skill="Credit Rating",
        creation_cap=75,
        absolute_cap=99,
    ),
    fractions=FractionRules(hard_divisor=2, extreme_divisor=5),
)
