"""
Skill point breakdown and allocation validation.

The credit rating pseudo-skill is tracked in the allocation maps but never
counts toward either budget or a skill ceiling; its value is governed by the
occupation's credit range instead.
"""

from collections.abc import Mapping

from ..models.attributes import Attributes
from ..models.catalog import CreationCatalog
from ..models.draft import SkillAllocation
from ..models.issues import Issue
from ..models.results import ComputedSkill
from ..rules_data import get_default_catalog
from ..structured_logging.logging_config import get_logger
from .skill_catalog import SkillCatalogResolver, get_skill_resolver

logger = get_logger(__name__)


def _merge_points(
    resolver: SkillCatalogResolver,
    buckets: list[tuple[str, Mapping[str, int]]],
    seed_names: list[str] | None = None,
) -> tuple[dict[str, str], dict[str, dict[str, int]]]:
    """Merge spellings of the same skill; the first spelling seen names the entry."""
    names: dict[str, str] = {}
    points: dict[str, dict[str, int]] = {}
    for name in seed_names or []:
        names.setdefault(resolver.identity_key(name), name)
    for bucket, mapping in buckets:
        for name, value in mapping.items():
            key = resolver.identity_key(name)
            names.setdefault(key, name)
            per_key = points.setdefault(key, {})
            per_key[bucket] = per_key.get(bucket, 0) + value
    return names, points


def compute_skill_breakdown(
    attributes: Attributes | None,
    skills: SkillAllocation,
    include_catalog: bool = False,
    catalog: CreationCatalog | None = None,
) -> dict[str, ComputedSkill]:
    """
    Compute base, allocated points and thresholds for every allocated skill.

    Args:
        attributes: Final attributes; attribute-derived bases count as 0 without them
        skills: Occupation and personal allocations
        include_catalog: Also list every catalog skill, allocated or not
        catalog: Creation catalog (built-in default when omitted)

    Returns:
        dict[str, ComputedSkill]: Keyed by the first spelling seen for each skill
    """
    catalog = catalog or get_default_catalog()
    resolver = get_skill_resolver(catalog)
    fractions = catalog.rules.fractions
    seed = catalog.skills.names() if include_catalog else None
    names, points = _merge_points(resolver, [("occupation", skills.occupation), ("personal", skills.personal)], seed)

    computed: dict[str, ComputedSkill] = {}
    for key, name in names.items():
        occupation = points.get(key, {}).get("occupation", 0)
        personal = points.get(key, {}).get("personal", 0)
        base = resolver.base_value(name, attributes)
        total = base + occupation + personal
        computed[name] = ComputedSkill(
            base=base,
            occupation=occupation,
            personal=personal,
            total=total,
            hard=total // fractions.hard_divisor,
            extreme=total // fractions.extreme_divisor,
        )
    return computed


def _budget_issue(code_prefix: str, label: str, spent: int, budget: int, field: str) -> Issue | None:
    if spent > budget:
        return Issue.error(
            f"{code_prefix}_POINTS_EXCEEDED", f"{label} points exceeded: {spent} spent of {budget}.", field
        )
    if spent < budget:
        return Issue.warning(
            f"{code_prefix}_POINTS_PENDING", f"{label} points pending: {budget - spent} of {budget} unspent.", field
        )
    return None


def validate_skill_allocation(
    occupation_budget: int,
    personal_budget: int,
    occupation_map: Mapping[str, int],
    personal_map: Mapping[str, int],
    credit_rating: int = 0,
    attributes: Attributes | None = None,
    catalog: CreationCatalog | None = None,
) -> list[Issue]:
    """
    Check skill point allocations against budgets and ceilings.

    Issues come back in this order: forbidden skills, occupation budget,
    personal budget, then per-skill ceilings. The occupation budget is reduced
    by the credit rating. The creation ceiling is only checked when attributes
    are given, and not for a skill already over the absolute ceiling.

    Args:
        occupation_budget: Occupation skill points available
        personal_budget: Personal interest points available
        occupation_map: Skill name to occupation points
        personal_map: Skill name to personal points
        credit_rating: Credit rating bought from the occupation budget
        attributes: Final attributes, needed for attribute-derived bases
        catalog: Creation catalog (built-in default when omitted)

    Returns:
        list[Issue]: Ordered issues, empty when the allocation is complete and valid
    """
    catalog = catalog or get_default_catalog()
    resolver = get_skill_resolver(catalog)
    point_rules = catalog.rules.skill_points
    issues: list[Issue] = []

    reported: set[str] = set()
    for bucket, mapping in (("occupation", occupation_map), ("personal", personal_map)):
        for name, points in mapping.items():
            if points <= 0 or resolver.is_credit_skill(name) or not resolver.is_forbidden_skill(name):
                continue
            key = resolver.identity_key(name)
            if key in reported:
                continue
            reported.add(key)
            issues.append(
                Issue.error("FORBIDDEN_SKILL", f"{name} cannot receive points during creation.", f"skills.{bucket}")
            )

    occupation_spent = sum(points for name, points in occupation_map.items() if not resolver.is_credit_skill(name))
    personal_spent = sum(points for name, points in personal_map.items() if not resolver.is_credit_skill(name))

    for issue in (
        _budget_issue(
            "OCCUPATION", "Occupation", occupation_spent, occupation_budget - credit_rating, "skills.occupation"
        ),
        _budget_issue("PERSONAL", "Personal interest", personal_spent, personal_budget, "skills.personal"),
    ):
        if issue is not None:
            issues.append(issue)

    names, points = _merge_points(resolver, [("occupation", occupation_map), ("personal", personal_map)])
    for key, name in names.items():
        if resolver.is_credit_skill(name):
            continue
        total = resolver.base_value(name, attributes) + sum(points.get(key, {}).values())
        if total > point_rules.absolute_cap:
            issues.append(
                Issue.error(
                    "SKILL_ABSOLUTE_CAP_EXCEEDED",
                    f"{name} exceeds the absolute cap of {point_rules.absolute_cap}% ({total}%).",
                    f"skills.{name}",
                )
            )
        elif attributes is not None and total > point_rules.creation_cap:
            issues.append(
                Issue.error(
                    "SKILL_CREATION_CAP_EXCEEDED",
                    f"{name} exceeds the creation cap of {point_rules.creation_cap}% ({total}%).",
                    f"skills.{name}",
                )
            )

    logger.debug(
        "Skill allocation validated",
        occupation_spent=occupation_spent,
        personal_spent=personal_spent,
        issues=[issue.code for issue in issues],
    )
    return issues
