"""
Step validation for the ten-stage creation wizard.

validate_step(step, draft) is pure: it reads the draft snapshot and returns the
ordered issues for every step up to and including ``step``. The caller blocks
forward navigation while any error-severity issue remains; warnings are shown
but do not block.
"""

from collections.abc import Callable
from enum import IntEnum

from ..config import get_config
from ..exceptions import ConfigurationError, create_error_context, log_and_raise
from ..models.catalog import AgeBandKind, CreationCatalog, Occupation
from ..models.draft import Draft
from ..models.issues import Issue, has_errors
from ..rules_data import get_default_catalog
from ..structured_logging.logging_config import get_logger
from . import formula as formula_evaluator
from .skill_catalog import SkillCatalogResolver, get_skill_resolver
from .skill_points import validate_skill_allocation

logger = get_logger(__name__)

MIN_BACKGROUND_CATEGORIES = 3


class WizardStep(IntEnum):
    """The creation wizard's steps, in order."""

    AGE = 1
    ATTRIBUTES = 2
    DERIVED_STATS = 3
    OCCUPATION = 4
    OCCUPATION_CHOICES = 5
    SKILLS = 6
    IDENTITY = 7
    EQUIPMENT = 8
    BACKGROUND = 9
    SUMMARY = 10


class _StepContext:  # pylint: disable=too-few-public-methods  # Reason: Per-call state container
    """Shared lookups for one validation call."""

    def __init__(self, draft: Draft, catalog: CreationCatalog, strict_formula_choices: bool) -> None:
        self.draft = draft
        self.catalog = catalog
        self.resolver: SkillCatalogResolver = get_skill_resolver(catalog)
        self.strict_formula_choices = strict_formula_choices
        self.occupation: Occupation | None = (
            catalog.occupations.get(draft.occupation.name) if draft.occupation is not None else None
        )


def _check_age(ctx: _StepContext) -> list[Issue]:
    rules = ctx.catalog.rules
    draft = ctx.draft
    issues: list[Issue] = []

    if draft.age < rules.min_age or draft.age > rules.max_age:
        issues.append(
            Issue.warning(
                "AGE_RANGE",
                f"Age is outside {rules.min_age}-{rules.max_age}; confirm with the Keeper.",
                "age",
            )
        )

    band = rules.band_for_age(draft.age)
    allocation = draft.age_penalty_allocation
    if band is not None and band.kind is AgeBandKind.YOUTH and allocation.youth_total != band.penalty_total:
        issues.append(
            Issue.error(
                "AGE_YOUTH_PENALTY_MISMATCH",
                f"STR/SIZ deductions must add up to exactly {band.penalty_total} (currently {allocation.youth_total}).",
                "age_penalty_allocation",
            )
        )
    if band is not None and band.kind is AgeBandKind.MATURE and allocation.mature_total != band.penalty_total:
        issues.append(
            Issue.error(
                "AGE_MATURE_PENALTY_MISMATCH",
                f"STR/CON/DEX deductions must add up to exactly {band.penalty_total} "
                f"(currently {allocation.mature_total}).",
                "age_penalty_allocation",
            )
        )
    return issues


def _check_attributes(ctx: _StepContext) -> list[Issue]:
    draft = ctx.draft
    if draft.attributes is None:
        return [Issue.error("MISSING_ATTRIBUTES", "Roll or enter every attribute.", "attributes")]

    issues = [
        Issue.error(
            "ATTRIBUTE_OUT_OF_RANGE",
            f"{attribute.value.capitalize()} is {draft.attributes.get(attribute)}; it must be between 1 and 99.",
            f"attributes.{attribute.value}",
        )
        for attribute in draft.attributes.out_of_range()
    ]
    if draft.last_rolled_age is not None and draft.last_rolled_age != draft.age:
        issues.append(
            Issue.warning(
                "AGE_ROLL_MISMATCH",
                f"Attributes were rolled for age {draft.last_rolled_age}; re-roll to apply the modifiers for age "
                f"{draft.age}.",
                "age",
            )
        )
    return issues


def _check_occupation(ctx: _StepContext) -> list[Issue]:
    selection = ctx.draft.occupation
    if selection is None:
        return [Issue.error("MISSING_OCCUPATION", "Select an occupation.", "occupation")]
    if ctx.occupation is None:
        return [
            Issue.error(
                "INVALID_OCCUPATION",
                f"Occupation '{selection.name}' is not in the catalog.",
                "occupation.name",
            )
        ]

    credit = ctx.occupation.credit_range
    if not credit.contains(selection.credit_rating):
        return [
            Issue.error(
                "CREDIT_RANGE",
                f"Credit Rating {selection.credit_rating} is outside the allowed range ({credit.min}-{credit.max}).",
                "occupation.credit_rating",
            )
        ]
    return []


def _check_occupation_choices(ctx: _StepContext) -> list[Issue]:
    selection = ctx.draft.occupation
    if selection is None or ctx.occupation is None:
        return []

    issues = ctx.resolver.validate_choice_selections(selection)

    points_formula = ctx.occupation.points_formula
    groups = formula_evaluator.choice_groups(points_formula)
    flagged = set(formula_evaluator.invalid_choices(points_formula, selection.formula_choices))
    if ctx.strict_formula_choices:
        chosen = {
            formula_evaluator.normalize_choice_key(key) for key, value in selection.formula_choices.items() if value
        }
        flagged.update(group.index for group in groups if group.index not in chosen)

    displays = {group.index: group.display for group in groups}
    for index in sorted(flagged):
        options = displays.get(index)
        message = (
            f"Choose one option for the skill point formula ({options})."
            if options
            else f"The skill point formula has no alternative group {index}."
        )
        issues.append(Issue.error("OCCUPATION_FORMULA_CHOICE", message, f"occupation.formula_choices.{index}"))
    return issues


def _check_skills(ctx: _StepContext) -> list[Issue]:
    draft = ctx.draft
    selection = draft.occupation
    if draft.attributes is None or selection is None or ctx.occupation is None:
        return []

    points_formula = ctx.occupation.points_formula
    invalid = set(formula_evaluator.invalid_choices(points_formula, selection.formula_choices))
    usable = {
        key: value
        for key, value in selection.formula_choices.items()
        if value and formula_evaluator.normalize_choice_key(key) not in invalid
    }
    occupation_budget = formula_evaluator.resolve(points_formula, draft.attributes, usable).total
    personal_budget = formula_evaluator.resolve(
        ctx.catalog.rules.skill_points.personal_interest_formula, draft.attributes
    ).total

    issues = validate_skill_allocation(
        occupation_budget,
        personal_budget,
        draft.skills.occupation,
        draft.skills.personal,
        credit_rating=selection.credit_rating,
        attributes=draft.attributes,
        catalog=ctx.catalog,
    )

    for skill, points in draft.skills.occupation.items():
        if points <= 0 or ctx.resolver.is_credit_skill(skill):
            continue
        if not ctx.resolver.is_allowed_occupation_skill(selection, skill):
            issues.append(
                Issue.error(
                    "INVALID_OCCUPATION_SKILL",
                    f"{skill} is not one of the skills the selected occupation allows.",
                    f"skills.occupation.{skill}",
                )
            )
    return issues


def _check_equipment(ctx: _StepContext) -> list[Issue]:
    equipment = ctx.draft.equipment
    required = (
        ("MISSING_SPENDING_LEVEL", equipment.spending_level, "Fill in the spending level.", "equipment.spending_level"),
        ("MISSING_CASH", equipment.cash, "Fill in the cash on hand.", "equipment.cash"),
        ("MISSING_ASSETS", equipment.assets, "Fill in the assets.", "equipment.assets"),
        (
            "MISSING_EQUIPMENT_NOTES",
            equipment.notes,
            "Note weapons, equipment and important possessions.",
            "equipment.notes",
        ),
    )
    return [Issue.error(code, message, field) for code, value, message, field in required if not value.strip()]


def _check_background(ctx: _StepContext) -> list[Issue]:
    background = ctx.draft.background
    issues: list[Issue] = []
    if background.completed_categories() < MIN_BACKGROUND_CATEGORIES:
        issues.append(
            Issue.error(
                "MISSING_BACKGROUND_MINIMUM",
                f"Complete at least {MIN_BACKGROUND_CATEGORIES} background categories (description, "
                "ideology/beliefs, significant people, meaningful locations, treasured possessions or traits).",
                "background",
            )
        )
    if not background.core_connection.strip():
        issues.append(
            Issue.error(
                "MISSING_CORE_CONNECTION",
                "Name the investigator's core connection.",
                "background.core_connection",
            )
        )
    return issues


def _no_checks(_ctx: _StepContext) -> list[Issue]:
    return []


_STEP_CHECKS: dict[WizardStep, Callable[[_StepContext], list[Issue]]] = {
    WizardStep.AGE: _check_age,
    WizardStep.ATTRIBUTES: _check_attributes,
    WizardStep.DERIVED_STATS: _no_checks,
    WizardStep.OCCUPATION: _check_occupation,
    WizardStep.OCCUPATION_CHOICES: _check_occupation_choices,
    WizardStep.SKILLS: _check_skills,
    WizardStep.IDENTITY: _no_checks,
    WizardStep.EQUIPMENT: _check_equipment,
    WizardStep.BACKGROUND: _check_background,
    WizardStep.SUMMARY: _no_checks,
}


_STEP_NUMBERS = frozenset(int(step) for step in WizardStep)


def _as_step(step: int | WizardStep) -> WizardStep:
    if step not in _STEP_NUMBERS:
        log_and_raise(
            ConfigurationError,
            f"Unknown wizard step: {step!r}",
            context=create_error_context(operation="validate_step"),
            user_friendly="That step does not exist.",
            config_key="step",
        )
    return WizardStep(step)


def validate_step(
    step: int | WizardStep,
    draft: Draft,
    catalog: CreationCatalog | None = None,
    strict_formula_choices: bool | None = None,
) -> list[Issue]:
    """
    Validate a draft up to and including a wizard step.

    Args:
        step: Wizard step, 1-10
        draft: Draft snapshot
        catalog: Creation catalog (built-in default when omitted)
        strict_formula_choices: Require an explicit pick for every formula group;
            defaults to the engine configuration

    Returns:
        list[Issue]: Issues of every step up to ``step``, in step order

    Raises:
        ConfigurationError: If ``step`` is not a wizard step
    """
    target = _as_step(step)
    if strict_formula_choices is None:
        strict_formula_choices = get_config().engine.strict_formula_choices
    ctx = _StepContext(draft, catalog or get_default_catalog(), strict_formula_choices)

    issues: list[Issue] = []
    for wizard_step in WizardStep:
        if wizard_step > target:
            break
        issues.extend(_STEP_CHECKS[wizard_step](ctx))

    logger.debug("Step validated", step=int(target), issues=[issue.code for issue in issues])
    return issues


def can_advance(
    step: int | WizardStep,
    draft: Draft,
    catalog: CreationCatalog | None = None,
    strict_formula_choices: bool | None = None,
) -> bool:
    """True when the step holds no error-severity issue."""
    return not has_errors(validate_step(step, draft, catalog, strict_formula_choices))
