"""
Skill catalog resolver.

Skill names reach the engine in many spellings: different case, accents,
parenthetical notes ("Drive Automobile (or truck)"), aliases ("Mythos") and
specializations the catalog may not list ("Art/Craft (Pottery)"). Every name
is reduced to a normalized key and looked up in a single table built from the
catalog, in this order:

1. exact key (canonical names, aliases, specializations)
2. specialization family ("Art/Craft (Pottery)" uses the Art/Craft rule)
3. the name with its parenthetical removed

Names that still do not resolve have a base of 0.
"""

import re
import unicodedata
from dataclasses import dataclass
from functools import lru_cache

from ..exceptions import ConfigurationError, UnknownOccupationError, create_error_context
from ..models.attributes import Attributes, AttributeType
from ..models.catalog import ChoiceGroup, CreationCatalog, Occupation, SkillDefinition
from ..models.draft import OccupationSelection
from ..models.issues import Issue
from ..rules_data import get_default_catalog
from ..structured_logging.logging_config import get_logger

logger = get_logger(__name__)

_PARENTHETICAL = re.compile(r"\s*\(.*\)\s*$")
_OR_SEPARATOR = re.compile(r"\s+or\s+", re.IGNORECASE)


def normalize_skill_name(name: str) -> str:
    """
    Reduce a skill name to its comparison key.

    Strips diacritics, lower-cases, collapses whitespace and puts exactly one
    space before an opening parenthesis and none inside the parentheses.
    """
    decomposed = unicodedata.normalize("NFD", name)
    stripped = "".join(char for char in decomposed if not unicodedata.combining(char))
    text = stripped.lower()
    text = re.sub(r"\s*\(\s*", " (", text)
    text = re.sub(r"\s*\)", ")", text)
    text = re.sub(r"\s+", " ", text)
    return text.strip()


def _split_family(key: str) -> tuple[str, str | None]:
    """Split ``"family (specialization)"`` into its parts."""
    if key.endswith(")") and " (" in key:
        family, _, rest = key.partition(" (")
        return family, rest[:-1]
    return key, None


def _split_alternatives(entry: str) -> list[str]:
    """Split ``"A or B"`` outside parentheses."""
    parts: list[str] = []
    depth = 0
    current = ""
    index = 0
    while index < len(entry):
        char = entry[index]
        if char == "(":
            depth += 1
        elif char == ")":
            depth = max(0, depth - 1)
        if depth == 0:
            match = _OR_SEPARATOR.match(entry, index)
            if match and match.start() == index:
                parts.append(current)
                current = ""
                index = match.end()
                continue
        current += char
        index += 1
    parts.append(current)
    return [part.strip() for part in parts if part.strip()]


@dataclass(frozen=True)
class SkillRule:
    """The base rule a skill name resolves to."""

    name: str
    base: int = 0
    base_attribute: AttributeType | None = None
    base_divisor: int = 1
    family: str | None = None
    generic: bool = False

    def base_value(self, attributes: Attributes | None) -> int:
        if self.base_attribute is None:
            return self.base
        if attributes is None:
            return 0
        return attributes.get(self.base_attribute) // self.base_divisor


class SkillCatalogResolver:
    """Name lookups, specialization expansion and occupation allowances for one catalog."""

    def __init__(self, catalog: CreationCatalog | None = None) -> None:
        self.catalog = catalog or get_default_catalog()
        self._rules: dict[str, SkillRule] = {}
        self._families: dict[str, SkillDefinition] = {}
        self._wildcard = normalize_skill_name(self.catalog.skills.wildcard_word)
        for skill in self.catalog.skills.skills:
            self._register(skill)

        points = self.catalog.rules.skill_points
        self._credit_key = self.identity_key(points.credit_skill)
        self._forbidden_keys = {self.identity_key(name) for name in points.cannot_allocate_to}

    def _register(self, skill: SkillDefinition) -> None:
        rule = SkillRule(
            name=skill.name,
            base=skill.base,
            base_attribute=skill.base_attribute,
            base_divisor=skill.base_divisor,
            generic=skill.generic,
        )
        for name in (skill.name, *skill.aliases):
            self._rules.setdefault(normalize_skill_name(name), rule)
        if skill.specializations:
            for name in (skill.name, *skill.aliases):
                self._families[normalize_skill_name(name)] = skill
        for specialization in skill.specializations:
            spec_rule = SkillRule(
                name=specialization.name,
                base=skill.base if specialization.base is None else specialization.base,
                base_attribute=skill.base_attribute if specialization.base is None else None,
                base_divisor=skill.base_divisor,
                family=skill.name,
            )
            for name in (specialization.name, *specialization.aliases):
                self._rules.setdefault(normalize_skill_name(name), spec_rule)

    # Lookup

    def lookup(self, name: str) -> SkillRule | None:
        """Resolve a skill name to its rule, or None when the catalog does not know it."""
        key = normalize_skill_name(name)
        rule = self._rules.get(key)
        if rule is not None:
            return rule

        family_key, specialization = _split_family(key)
        if specialization is not None:
            family = self._families.get(family_key)
            if family is not None:
                return SkillRule(
                    name=name.strip(),
                    base=family.base,
                    base_attribute=family.base_attribute,
                    base_divisor=family.base_divisor,
                    family=family.name,
                )

        stripped = _PARENTHETICAL.sub("", key)
        if stripped != key:
            return self._rules.get(stripped)
        return None

    def canonical_name(self, name: str) -> str:
        """Catalog spelling for a name that resolves exactly or through an alias; otherwise the name itself."""
        rule = self._rules.get(normalize_skill_name(name))
        return rule.name if rule is not None else name.strip()

    def identity_key(self, name: str) -> str:
        """Key under which two spellings of the same skill compare equal."""
        return normalize_skill_name(self.canonical_name(name))

    def base_value(self, name: str, attributes: Attributes | None = None) -> int:
        """
        Innate base value of a skill.

        Attribute-derived bases count as 0 when no attributes are given.
        """
        rule = self.lookup(name)
        return rule.base_value(attributes) if rule is not None else 0

    def _resolved_keys(self, name: str) -> set[str]:
        """Identity key of ``name`` plus the key of the rule it resolves to through lookup."""
        keys = {self.identity_key(name)}
        rule = self.lookup(name)
        if rule is not None:
            keys.add(normalize_skill_name(rule.name))
        return keys

    def is_credit_skill(self, name: str) -> bool:
        return self._credit_key in self._resolved_keys(name)

    def is_forbidden_skill(self, name: str) -> bool:
        """True for skills that take no creation points, parenthetical variants included."""
        return not self._forbidden_keys.isdisjoint(self._resolved_keys(name))

    # Expansion

    def is_wildcard_entry(self, entry: str) -> bool:
        """True for "any skill" style entries that permit every skill."""
        key = normalize_skill_name(entry)
        return key == self._wildcard or key.startswith(f"{self._wildcard} ")

    def _family_grant(self, entry: str) -> SkillDefinition | None:
        """The family a generic entry grants: ``Art/Craft (any)``, ``Firearms`` or a bare family name."""
        key = normalize_skill_name(entry)
        family_key, specialization = _split_family(key)
        if specialization is not None and not (
            specialization == self._wildcard or specialization.startswith(f"{self._wildcard} ")
        ):
            return None
        return self._families.get(family_key)

    def expand_skill_entry(self, entry: str) -> list[str]:
        """
        Expand a catalog skill entry into concrete skill names.

        Generic placeholders become their specializations, "any" entries become
        every allocatable skill and "A or B" entries are split.
        """
        if self.is_wildcard_entry(entry):
            return self.catalog.skills.names()

        alternatives = _split_alternatives(entry)
        if len(alternatives) > 1:
            expanded: list[str] = []
            for alternative in alternatives:
                expanded.extend(self.expand_skill_entry(alternative))
            return expanded

        family = self._family_grant(entry)
        if family is not None and (family.generic or _split_family(normalize_skill_name(entry))[1] is not None):
            return [specialization.name for specialization in family.specializations]

        return [self.canonical_name(entry)]

    def entry_permits(self, entry: str, skill: str) -> bool:
        """Whether a catalog or selection entry permits allocating to ``skill``."""
        if self.is_wildcard_entry(entry):
            return True

        target = self.identity_key(skill)
        target_family, target_specialization = _split_family(target)
        for alternative in _split_alternatives(entry):
            family = self._family_grant(alternative)
            if family is not None and target_specialization is not None:
                family_keys = {normalize_skill_name(name) for name in (family.name, *family.aliases)}
                if target_family in family_keys:
                    return True
            if any(self.identity_key(name) == target for name in self.expand_skill_entry(alternative)):
                return True
        return False

    # Occupations

    def get_occupation(self, name: str) -> Occupation:
        """
        Look up an occupation by name.

        Raises:
            UnknownOccupationError: If the catalog has no such occupation
        """
        occupation = self.catalog.occupations.get(name)
        if occupation is None:
            raise UnknownOccupationError(
                f"Unknown occupation: {name!r}",
                context=create_error_context(operation="get_occupation"),
                occupation=name,
            )
        return occupation

    def choice_group_options(self, occupation_name: str, index: int) -> list[str]:
        """
        Concrete options of one choice group, expanded.

        Raises:
            ConfigurationError: If the occupation has no group at ``index``
        """
        occupation = self.get_occupation(occupation_name)
        if index < 0 or index >= len(occupation.choice_groups):
            raise ConfigurationError(
                f"Occupation {occupation.name!r} has no choice group {index}",
                context=create_error_context(operation="choice_group_options"),
                config_key=f"{occupation.name}.choice_groups",
            )
        options: list[str] = []
        seen: set[str] = set()
        for entry in occupation.choice_groups[index].options:
            for name in self.expand_skill_entry(entry):
                key = self.identity_key(name)
                if key not in seen:
                    seen.add(key)
                    options.append(name)
        return options

    def default_choice_selections(self, occupation_name: str) -> dict[str, list[str]]:
        """
        First ``count`` expanded options of each choice group.

        Non-allocatable skills and the credit pseudo-skill are never picked.
        """
        occupation = self.get_occupation(occupation_name)
        selections: dict[str, list[str]] = {}
        for index, group in enumerate(occupation.choice_groups):
            eligible = [
                option
                for option in self.choice_group_options(occupation.name, index)
                if not self.is_forbidden_skill(option) and not self.is_credit_skill(option)
            ]
            selections[choice_group_key(index, group)] = eligible[: group.count]
        return selections

    def validate_choice_selections(self, selection: OccupationSelection) -> list[Issue]:
        """Check every choice group has exactly ``count`` distinct picks drawn from its options."""
        occupation = self.get_occupation(selection.name)
        issues: list[Issue] = []
        for index, group in enumerate(occupation.choice_groups):
            key = choice_group_key(index, group)
            field = f"occupation.selected_choices.{key}"
            picks = [pick for pick in selection.selected_choices.get(key, []) if pick.strip()]

            if len(picks) != group.count:
                issues.append(
                    Issue.error(
                        "OCCUPATION_CHOICE_GROUP",
                        f"Choose exactly {group.count} for '{group.label}' ({len(picks)} chosen).",
                        field,
                    )
                )

            keys = [self.identity_key(pick) for pick in picks]
            if len(set(keys)) != len(keys):
                issues.append(
                    Issue.error("OCCUPATION_CHOICE_GROUP", f"Duplicate picks in '{group.label}'.", field)
                )

            for pick in picks:
                if not any(self.entry_permits(option, pick) for option in group.options):
                    issues.append(
                        Issue.error(
                            "OCCUPATION_CHOICE_GROUP",
                            f"{pick} is not an option of '{group.label}'.",
                            field,
                        )
                    )
        return issues

    def _allowance_entries(self, selection: OccupationSelection) -> list[str]:
        entries = list(selection.selected_skills)
        for picks in selection.selected_choices.values():
            entries.extend(picks)
        occupation = self.catalog.occupations.get(selection.name)
        if occupation is not None:
            entries.extend(occupation.skills)
        return entries

    def is_allowed_occupation_skill(self, selection: OccupationSelection, skill: str) -> bool:
        """
        Whether occupation points may go to ``skill``.

        A skill is allowed when it is directly selected, picked in a choice
        group, or listed by the occupation, each after expansion. Generic family
        entries permit any specialization of the family.
        """
        return any(self.entry_permits(entry, skill) for entry in self._allowance_entries(selection))

    def collect_allowed_occupation_skills(self, selection: OccupationSelection) -> list[str]:
        """Every concrete skill the selection permits, in first-seen order."""
        allowed: list[str] = []
        seen: set[str] = set()
        for entry in self._allowance_entries(selection):
            for name in self.expand_skill_entry(entry):
                key = self.identity_key(name)
                if key not in seen:
                    seen.add(key)
                    allowed.append(name)
        return allowed


def choice_group_key(index: int, group: ChoiceGroup) -> str:
    """Key of a choice group in ``OccupationSelection.selected_choices``."""
    return f"{index}:{group.label}"


@lru_cache(maxsize=1)
def _default_resolver() -> SkillCatalogResolver:
    return SkillCatalogResolver(get_default_catalog())


def get_skill_resolver(catalog: CreationCatalog | None = None) -> SkillCatalogResolver:
    """Resolver for the given catalog; the default catalog's resolver is shared."""
    if catalog is None or catalog is get_default_catalog():
        return _default_resolver()
    return SkillCatalogResolver(catalog)
