"""
Occupation skill point formulas.

Grammar::

    formula     := term ('+' term)*
    term        := group | product
    group       := '(' product (OR product)* ')'
    product     := ATTR (MUL INT)?
    OR          := 'or' | 'o'            (any case)
    MUL         := 'x' | 'X' | '*' | '×'

A parenthesis holding a single product, e.g. ``(APP x2)``, is a plain term.
Parentheses holding two or more alternatives are choice groups, numbered from
0 in the order they appear.

An alternative is identified by its token and factor with no space, upper
case: ``FUE x2`` is ``FUEX2``. Choices match by attribute and factor, so
``STRX2`` also selects ``FUE x2``.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache

from ..exceptions import FormulaResolutionError, create_error_context
from ..models.attributes import Attributes, AttributeType, attribute_from_token
from ..models.results import FormulaChoiceGroup, FormulaEvaluation
from ..structured_logging.logging_config import get_logger

logger = get_logger(__name__)

OR_WORDS = frozenset({"o", "or"})
MULTIPLY_SYMBOLS = frozenset({"x", "*", "×"})

_TOKEN_PATTERN = re.compile(r"\s*(?:(?P<number>\d+)|(?P<word>[^\W\d_]+)|(?P<symbol>[+()*×]))", re.UNICODE)
_GLUED_MULTIPLIER = re.compile(r"([^\W\d_])[xX](\d)")
_IDENTIFIER_PATTERN = re.compile(r"^([^\W\d_]+?)(?:X(\d+))?$")
_CHOICE_KEY_PATTERN = re.compile(r"^(?:choice_)?(\d+)$")

AttributeTable = Attributes | Mapping[str | AttributeType, int]


@dataclass(frozen=True)
class FormulaTerm:
    """An attribute multiplied by a factor."""

    token: str
    attribute: AttributeType
    factor: int = 1

    @property
    def identifier(self) -> str:
        return f"{self.token.upper()}X{self.factor}"

    @property
    def display(self) -> str:
        return f"{self.token.upper()} x{self.factor}"


@dataclass(frozen=True)
class AlternativeGroup:
    """A parenthesized set of alternatives, one of which contributes."""

    index: int
    alternatives: tuple[FormulaTerm, ...]

    def match(self, choice: str) -> FormulaTerm | None:
        """Find the alternative a choice identifier refers to."""
        parsed = _parse_identifier(choice)
        if parsed is None:
            return None
        attribute, factor = parsed
        for alternative in self.alternatives:
            if alternative.attribute is attribute and (factor is None or alternative.factor == factor):
                return alternative
        return None


@dataclass(frozen=True)
class ParsedFormula:
    """A formula as an ordered list of plain terms and numbered alternative groups."""

    source: str
    terms: tuple[FormulaTerm | AlternativeGroup, ...]

    @property
    def groups(self) -> tuple[AlternativeGroup, ...]:
        return tuple(term for term in self.terms if isinstance(term, AlternativeGroup))


def _fail(message: str, formula: str, group_index: int | None = None) -> FormulaResolutionError:
    return FormulaResolutionError(
        message,
        context=create_error_context(operation="formula"),
        formula=formula,
        group_index=group_index,
    )


def _tokenize(formula: str) -> list[str]:
    text = _GLUED_MULTIPLIER.sub(r"\1 x \2", formula)
    tokens: list[str] = []
    position = 0
    text = text.rstrip()
    while position < len(text):
        match = _TOKEN_PATTERN.match(text, position)
        if not match:
            raise _fail(f"Unexpected character {text[position:].strip()[:1]!r} in formula {formula!r}", formula)
        tokens.append(match.group(match.lastgroup))
        position = match.end()
    return tokens


class _Parser:
    """Recursive-descent parser over the token list."""

    def __init__(self, formula: str) -> None:
        self.formula = formula
        self.tokens = _tokenize(formula)
        self.position = 0
        self.group_count = 0

    def _peek(self) -> str | None:
        return self.tokens[self.position] if self.position < len(self.tokens) else None

    def _next(self) -> str:
        token = self._peek()
        if token is None:
            raise _fail(f"Formula {self.formula!r} ended unexpectedly", self.formula)
        self.position += 1
        return token

    def _expect(self, expected: str) -> None:
        token = self._next()
        if token != expected:
            raise _fail(f"Expected {expected!r} but found {token!r} in formula {self.formula!r}", self.formula)

    def parse(self) -> ParsedFormula:
        if not self.tokens:
            raise _fail("Formula is empty", self.formula)
        terms = [self._term()]
        while self._peek() is not None:
            self._expect("+")
            terms.append(self._term())
        return ParsedFormula(source=self.formula, terms=tuple(terms))

    def _term(self) -> FormulaTerm | AlternativeGroup:
        if self._peek() != "(":
            return self._product()

        self._next()
        alternatives = [self._product()]
        while (token := self._peek()) is not None and token.lower() in OR_WORDS:
            self._next()
            alternatives.append(self._product())
        self._expect(")")

        if len(alternatives) == 1:
            return alternatives[0]
        group = AlternativeGroup(index=self.group_count, alternatives=tuple(alternatives))
        self.group_count += 1
        return group

    def _product(self) -> FormulaTerm:
        token = self._next()
        attribute = attribute_from_token(token)
        if attribute is None or token.lower() in OR_WORDS:
            raise _fail(f"Unknown attribute {token!r} in formula {self.formula!r}", self.formula)

        factor = 1
        following = self._peek()
        if following is not None and following.lower() in MULTIPLY_SYMBOLS:
            self._next()
            number = self._next()
            if not number.isdigit():
                raise _fail(f"Expected a factor after {token!r} in formula {self.formula!r}", self.formula)
            factor = int(number)
        return FormulaTerm(token=token.upper(), attribute=attribute, factor=factor)


@lru_cache(maxsize=256)
def parse_formula(formula: str) -> ParsedFormula:
    """
    Parse an occupation point formula.

    Raises:
        FormulaResolutionError: If the formula is malformed or names an unknown attribute
    """
    return _Parser(formula).parse()


def _parse_identifier(choice: str) -> tuple[AttributeType, int | None] | None:
    cleaned = re.sub(r"\s+", "", str(choice)).upper()
    match = _IDENTIFIER_PATTERN.match(cleaned)
    if not match:
        return None
    attribute = attribute_from_token(match.group(1))
    if attribute is None:
        return None
    return attribute, int(match.group(2)) if match.group(2) else None


def normalize_choice_key(key: int | str) -> int:
    """Accept ``0``, ``"0"`` or ``"choice_0"`` as a group index."""
    if isinstance(key, int):
        return key
    match = _CHOICE_KEY_PATTERN.match(str(key).strip().lower())
    if not match:
        raise FormulaResolutionError(
            f"Invalid formula choice key {key!r}",
            context=create_error_context(operation="formula"),
        )
    return int(match.group(1))


def _normalize_choices(parsed: ParsedFormula, choices: Mapping[int | str, str] | None) -> dict[int, str]:
    normalized = {normalize_choice_key(key): value for key, value in (choices or {}).items() if value}
    group_count = len(parsed.groups)
    for index in normalized:
        if index < 0 or index >= group_count:
            raise _fail(
                f"Formula {parsed.source!r} has no alternative group {index}",
                parsed.source,
                group_index=index,
            )
    return normalized


def _attribute_table(attributes: AttributeTable, formula: str) -> dict[AttributeType, int]:
    if isinstance(attributes, Attributes):
        return attributes.as_dict()
    table: dict[AttributeType, int] = {}
    for key, value in attributes.items():
        attribute = key if isinstance(key, AttributeType) else attribute_from_token(key)
        if attribute is None:
            raise _fail(f"Unknown attribute {key!r} in attribute table", formula)
        table[attribute] = value
    return table


def _contribution(term: FormulaTerm, table: dict[AttributeType, int], formula: str) -> int:
    if term.attribute not in table:
        raise _fail(f"Attribute {term.token} is missing from the attribute table", formula)
    return table[term.attribute] * term.factor


def _best_alternative(group: AlternativeGroup, table: dict[AttributeType, int], formula: str) -> FormulaTerm:
    best = group.alternatives[0]
    best_value = _contribution(best, table, formula)
    for alternative in group.alternatives[1:]:
        value = _contribution(alternative, table, formula)
        if value > best_value:
            best, best_value = alternative, value
    return best


def _evaluate(
    formula: str,
    attributes: AttributeTable,
    choices: Mapping[int | str, str] | None,
    fill_missing: bool,
) -> FormulaEvaluation:
    parsed = parse_formula(formula)
    table = _attribute_table(attributes, formula)
    selected = _normalize_choices(parsed, choices)

    total = 0
    picked: dict[int, str] = {}
    for term in parsed.terms:
        if isinstance(term, FormulaTerm):
            total += _contribution(term, table, formula)
            continue

        choice = selected.get(term.index)
        if choice is None:
            if not fill_missing:
                raise _fail(
                    f"No choice given for alternative group {term.index} of formula {formula!r}",
                    formula,
                    group_index=term.index,
                )
            alternative = _best_alternative(term, table, formula)
        else:
            alternative = term.match(choice)
            if alternative is None:
                raise _fail(
                    f"Choice {choice!r} matches no alternative of group {term.index} in formula {formula!r}",
                    formula,
                    group_index=term.index,
                )
        total += _contribution(alternative, table, formula)
        picked[term.index] = alternative.identifier

    logger.debug("Formula evaluated", formula=formula, total=total, choices=picked)
    return FormulaEvaluation(total=total, choices=picked)


def evaluate(formula: str, attributes: AttributeTable, choices: Mapping[int | str, str] | None = None) -> int:
    """
    Evaluate a formula with an explicit choice for every alternative group.

    Args:
        formula: Occupation point formula
        attributes: Attributes, or a mapping of tokens/AttributeType to values
        choices: Group index to alternative identifier

    Returns:
        int: Formula total

    Raises:
        FormulaResolutionError: If a group has no choice, a choice matches no
            alternative, or a choice names a group that does not exist
    """
    return _evaluate(formula, attributes, choices, fill_missing=False).total


def maximize(formula: str, attributes: AttributeTable) -> FormulaEvaluation:
    """
    Pick the best alternative for each group independently.

    Ties go to the first-declared alternative. The returned choices use the
    same identifiers ``evaluate`` accepts.
    """
    return _evaluate(formula, attributes, None, fill_missing=True)


def resolve(
    formula: str,
    attributes: AttributeTable,
    choices: Mapping[int | str, str] | None = None,
) -> FormulaEvaluation:
    """Use the explicit choices given and maximize only the groups left unchosen."""
    return _evaluate(formula, attributes, choices, fill_missing=True)


def choice_groups(formula: str) -> list[FormulaChoiceGroup]:
    """List a formula's alternative groups with their option identifiers."""
    return [
        FormulaChoiceGroup(
            index=group.index,
            key=str(group.index),
            options=[alternative.identifier for alternative in group.alternatives],
            display=" or ".join(alternative.display for alternative in group.alternatives),
        )
        for group in parse_formula(formula).groups
    ]


def invalid_choices(formula: str, choices: Mapping[int | str, str] | None) -> list[int]:
    """
    Return the group indexes whose supplied choice matches none of the alternatives.

    Choice keys naming groups that do not exist are reported too. Unparseable
    keys still raise FormulaResolutionError.
    """
    parsed = parse_formula(formula)
    groups = {group.index: group for group in parsed.groups}
    invalid: list[int] = []
    for key, choice in (choices or {}).items():
        if not choice:
            continue
        index = normalize_choice_key(key)
        group = groups.get(index)
        if group is None or group.match(choice) is None:
            invalid.append(index)
    return sorted(invalid)
