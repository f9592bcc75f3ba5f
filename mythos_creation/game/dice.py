"""
Dice rolling for investigator creation.

Supports the compound notations used by the rules catalog:

    3D6        roll three six-sided dice and sum them
    3D6x5      ... and multiply the sum by 5
    (2D6+6)x5  roll, add 6, then multiply by 5

The randomness source is injectable. Anything with a ``randint(a, b)`` method
works, so ``random.Random(seed)`` gives reproducible rolls and tests can feed a
scripted sequence.
"""

import random
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Protocol

from ..config import get_config
from ..exceptions import DiceNotationError, create_error_context
from ..models.attributes import ATTRIBUTE_MAX, ATTRIBUTE_MIN
from ..models.results import RollDetail
from ..structured_logging.logging_config import get_logger

logger = get_logger(__name__)

_NOTATION_PATTERN = re.compile(r"^(?:\((\d*)D(\d+)\+(\d+)\)|(\d*)D(\d+)(?:\+(\d+))?)(?:X(\d+))?$")


class RandomSource(Protocol):  # pylint: disable=too-few-public-methods  # Reason: Protocol
    """Anything that can produce a uniform integer in [a, b]."""

    def randint(self, a: int, b: int) -> int: ...


@dataclass(frozen=True)
class DiceNotation:
    """A parsed compound dice notation."""

    count: int
    sides: int
    add: int = 0
    multiplier: int = 1

    @property
    def label(self) -> str:
        return f"{self.count}D{self.sides}"


@lru_cache(maxsize=256)
def parse_notation(notation: str) -> DiceNotation:
    """
    Parse a compound dice notation.

    Whitespace and case are ignored, and the multiplier may be written
    ``x``, ``*`` or ``×``.

    Raises:
        DiceNotationError: If the notation is not supported
    """
    cleaned = re.sub(r"\s+", "", notation).upper().replace("*", "X").replace("×", "X")
    match = _NOTATION_PATTERN.match(cleaned)
    if not match:
        raise DiceNotationError(
            f"Unsupported dice notation: {notation!r}",
            context=create_error_context(operation="parse_notation"),
            notation=notation,
        )

    if match.group(2) is not None:
        count, sides, add = match.group(1), match.group(2), match.group(3)
    else:
        count, sides, add = match.group(4), match.group(5), match.group(6)

    parsed = DiceNotation(
        count=int(count) if count else 1,
        sides=int(sides),
        add=int(add) if add else 0,
        multiplier=int(match.group(7)) if match.group(7) else 1,
    )
    if parsed.count < 1 or parsed.sides < 1 or parsed.multiplier < 1:
        raise DiceNotationError(
            f"Dice notation must use at least one die, one side and a positive multiplier: {notation!r}",
            context=create_error_context(operation="parse_notation"),
            notation=notation,
        )
    return parsed


def clamp_attribute(value: int) -> int:
    """Clamp a rolled attribute into [1, 99]."""
    return max(ATTRIBUTE_MIN, min(ATTRIBUTE_MAX, value))


class DiceRoller:
    """Rolls compound dice notations against an injectable random source."""

    def __init__(self, rng: RandomSource | None = None, seed: int | None = None) -> None:
        """
        Initialize the roller.

        Args:
            rng: Random source to draw from. When omitted a ``random.Random`` is
                created from ``seed`` or, failing that, the configured dice seed.
            seed: Seed for the default random source
        """
        if rng is None:
            if seed is None:
                seed = get_config().engine.dice_seed
            rng = random.Random(seed)
        self._rng = rng

    def roll_dice(self, count: int, sides: int) -> list[int]:
        """Roll ``count`` dice with ``sides`` faces each."""
        return [self._rng.randint(1, sides) for _ in range(count)]

    def roll_detailed(self, notation: str) -> RollDetail:
        """Roll a notation and return the individual dice with the computation steps."""
        parsed = parse_notation(notation)
        rolls = self.roll_dice(parsed.count, parsed.sides)
        subtotal = sum(rolls) + parsed.add
        total = subtotal * parsed.multiplier

        steps = [f"{parsed.label}: [{', '.join(str(roll) for roll in rolls)}]"]
        if parsed.add:
            steps.append(f"Sum: {sum(rolls)} + {parsed.add} = {subtotal}")
        else:
            steps.append(f"Sum: {subtotal}")
        if parsed.multiplier != 1:
            steps.append(f"x{parsed.multiplier} => {total}")

        logger.debug("Dice rolled", notation=notation, rolls=rolls, total=total)
        return RollDetail(
            formula=notation,
            rolls=rolls,
            add=parsed.add,
            multiplier=parsed.multiplier,
            subtotal=subtotal,
            total=total,
            steps=steps,
        )

    def roll(self, notation: str) -> int:
        """Roll a notation and return the total."""
        return self.roll_detailed(notation).total

    def roll_attribute_detailed(self, notation: str) -> RollDetail:
        """Roll an attribute notation, clamping the total to [1, 99]."""
        detail = self.roll_detailed(notation)
        clamped = clamp_attribute(detail.total)
        if clamped == detail.total:
            return detail
        clamp_step = f"Clamped to [{ATTRIBUTE_MIN}, {ATTRIBUTE_MAX}] => {clamped}"
        return detail.model_copy(update={"total": clamped, "steps": [*detail.steps, clamp_step]})

    def roll_attribute(self, notation: str) -> int:
        return self.roll_attribute_detailed(notation).total

    def percentile(self) -> int:
        """Roll 1D100."""
        return self._rng.randint(1, 100)
