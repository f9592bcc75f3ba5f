"""
Built-in default catalog.

Callers with their own catalog data build a CreationCatalog and pass it to the
engine; everything else uses get_default_catalog().
"""

from functools import lru_cache

from mythos_creation.models.catalog import CreationCatalog

from .occupations import CLASSIC_OCCUPATIONS
from .rules import CLASSIC_RULES
from .skills import CLASSIC_SKILLS

__all__ = ["get_default_catalog", "CLASSIC_RULES", "CLASSIC_SKILLS", "CLASSIC_OCCUPATIONS"]


@lru_cache(maxsize=1)
def get_default_catalog() -> CreationCatalog:
    """Return the classic-era catalog, built once per process."""
    return CreationCatalog(rules=CLASSIC_RULES, skills=CLASSIC_SKILLS, occupations=CLASSIC_OCCUPATIONS)
