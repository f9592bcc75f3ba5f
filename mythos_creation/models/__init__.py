"""
Data models for investigator creation.

This package contains:
- Attribute models (attributes, age penalty allocation)
- Draft snapshot models (occupation selection, skill allocation, narrative fields)
- Catalog models (rules, skills, occupations)
- Validation issues and engine results
"""

from .attributes import (
    ATTRIBUTE_MAX,
    ATTRIBUTE_MIN,
    ATTRIBUTE_TOKENS,
    AgePenaltyAllocation,
    Attributes,
    AttributeType,
    attribute_from_token,
)
from .catalog import (
    AgeBand,
    AgeBandKind,
    BuildDamageRow,
    BuildOverflowRule,
    ChoiceGroup,
    CreationCatalog,
    CreditRange,
    DerivedStatRules,
    EducationImprovementRule,
    FractionRules,
    MoveRateRule,
    Occupation,
    OccupationCatalog,
    RulesCatalog,
    SkillCatalog,
    SkillDefinition,
    SkillPointRules,
    SkillSpecialization,
)
from .draft import Background, Companion, Draft, Equipment, Identity, OccupationSelection, SkillAllocation
from .issues import Issue, Severity, has_errors, issue_codes
from .results import (
    AgeAdjustment,
    AttributeFractions,
    CharacterSheet,
    ComputedSkill,
    DerivedStats,
    DetailedValue,
    FinanceSnapshot,
    FormulaChoiceGroup,
    FormulaEvaluation,
    RollDetail,
)

__all__ = [
    "ATTRIBUTE_MAX",
    "ATTRIBUTE_MIN",
    "ATTRIBUTE_TOKENS",
    "AgePenaltyAllocation",
    "Attributes",
    "AttributeType",
    "attribute_from_token",
    "AgeBand",
    "AgeBandKind",
    "BuildDamageRow",
    "BuildOverflowRule",
    "ChoiceGroup",
    "CreationCatalog",
    "CreditRange",
    "DerivedStatRules",
    "EducationImprovementRule",
    "FractionRules",
    "MoveRateRule",
    "Occupation",
    "OccupationCatalog",
    "RulesCatalog",
    "SkillCatalog",
    "SkillDefinition",
    "SkillPointRules",
    "SkillSpecialization",
    "Background",
    "Companion",
    "Draft",
    "Equipment",
    "Identity",
    "OccupationSelection",
    "SkillAllocation",
    "Issue",
    "Severity",
    "has_errors",
    "issue_codes",
    "AgeAdjustment",
    "AttributeFractions",
    "CharacterSheet",
    "ComputedSkill",
    "DerivedStats",
    "DetailedValue",
    "FinanceSnapshot",
    "FormulaChoiceGroup",
    "FormulaEvaluation",
    "RollDetail",
]
