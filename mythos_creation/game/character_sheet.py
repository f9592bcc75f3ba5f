"""
Draft finalization.

Turns a fully validated draft into a frozen CharacterSheet.
"""

from ..exceptions import DraftIncompleteError, create_error_context
from ..models.attributes import ATTRIBUTE_MAX, AttributeType
from ..models.catalog import CreationCatalog
from ..models.draft import Draft
from ..models.results import CharacterSheet
from ..rules_data import get_default_catalog
from ..structured_logging.logging_config import get_logger
from .derived_stats import attribute_fractions, compute_derived_stats
from .finance import spending_level_for_credit
from .skill_points import compute_skill_breakdown
from .step_validator import WizardStep, validate_step

logger = get_logger(__name__)


def finalize_character(
    draft: Draft,
    catalog: CreationCatalog | None = None,
    strict_formula_choices: bool | None = None,
) -> CharacterSheet:
    """
    Build the finished character sheet from a draft.

    Args:
        draft: Draft snapshot
        catalog: Creation catalog (built-in default when omitted)
        strict_formula_choices: Passed through to step validation

    Returns:
        CharacterSheet: The finished investigator

    Raises:
        DraftIncompleteError: If any step still holds an error-severity issue
    """
    catalog = catalog or get_default_catalog()
    errors = [
        issue
        for issue in validate_step(WizardStep.SUMMARY, draft, catalog, strict_formula_choices)
        if issue.is_error
    ]
    if errors or draft.attributes is None or draft.occupation is None:
        raise DraftIncompleteError(
            "Cannot finalize character: " + " | ".join(issue.message for issue in errors),
            context=create_error_context(step=int(WizardStep.SUMMARY), operation="finalize_character"),
            issues=errors,
            user_friendly="The character still has unresolved problems.",
        )

    attributes = draft.attributes.with_values(
        {AttributeType.EDU: min(ATTRIBUTE_MAX, draft.attributes.education)}
    )
    sheet = CharacterSheet(
        mode=draft.mode,
        age=draft.age,
        era=draft.era,
        attributes=attributes,
        derived_stats=compute_derived_stats(attributes, draft.age, catalog),
        fractions=attribute_fractions(attributes, catalog),
        occupation=draft.occupation,
        skills=draft.skills,
        computed_skills=compute_skill_breakdown(attributes, draft.skills, include_catalog=True, catalog=catalog),
        finance=spending_level_for_credit(draft.occupation.credit_rating),
        background=draft.background,
        identity=draft.identity,
        companions=draft.companions,
        equipment=draft.equipment,
    )
    logger.info("Character finalized", occupation=draft.occupation.name, age=draft.age)
    return sheet
