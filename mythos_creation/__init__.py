"""
Rules engine for 7th-edition investigator creation.

The engine takes an immutable Draft snapshot and a CreationCatalog and returns
pure results: rolled and adjusted attributes, derived statistics, formula
totals, skill breakdowns and ordered validation issues.
"""

from .exceptions import (
    ConfigurationError,
    DiceNotationError,
    DraftIncompleteError,
    FormulaResolutionError,
    RulesEngineError,
    UnknownOccupationError,
)
from .game.age_modifier import AgeModifier, default_penalty_allocation
from .game.character_sheet import finalize_character
from .game.derived_stats import attribute_fractions, compute_derived_stats, extreme_value, hard_value
from .game.dice import DiceRoller
from .game.finance import spending_level_for_credit
from .game.formula import choice_groups, evaluate, maximize, parse_formula, resolve
from .game.skill_catalog import SkillCatalogResolver, get_skill_resolver, normalize_skill_name
from .game.skill_points import compute_skill_breakdown, validate_skill_allocation
from .game.stats_generator import StatsGenerator
from .game.step_validator import WizardStep, can_advance, validate_step
from .models import (
    AgePenaltyAllocation,
    Attributes,
    AttributeType,
    CreationCatalog,
    Draft,
    Issue,
    OccupationSelection,
    SkillAllocation,
)
from .rules_data import get_default_catalog

__version__ = "0.1.0"

__all__ = [
    "AgeModifier",
    "AgePenaltyAllocation",
    "Attributes",
    "AttributeType",
    "ConfigurationError",
    "CreationCatalog",
    "DiceNotationError",
    "DiceRoller",
    "Draft",
    "DraftIncompleteError",
    "FormulaResolutionError",
    "Issue",
    "OccupationSelection",
    "RulesEngineError",
    "SkillAllocation",
    "SkillCatalogResolver",
    "StatsGenerator",
    "UnknownOccupationError",
    "WizardStep",
    "attribute_fractions",
    "can_advance",
    "choice_groups",
    "compute_derived_stats",
    "compute_skill_breakdown",
    "default_penalty_allocation",
    "evaluate",
    "extreme_value",
    "finalize_character",
    "get_default_catalog",
    "get_skill_resolver",
    "hard_value",
    "maximize",
    "normalize_skill_name",
    "parse_formula",
    "resolve",
    "spending_level_for_credit",
    "validate_skill_allocation",
    "validate_step",
]
