"""
Attribute models for investigator creation.

This module contains the nine core attributes, the abbreviations catalogs use
to refer to them, and the player's distribution of mandatory age penalties.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

ATTRIBUTE_MIN = 1
ATTRIBUTE_MAX = 99


class AttributeType(str, Enum):
    """Core attribute types for the investigator."""

    STR = "strength"
    CON = "constitution"
    SIZ = "size"
    DEX = "dexterity"
    APP = "appearance"
    INT = "intelligence"
    POW = "power"
    EDU = "education"
    LUCK = "luck"


# Abbreviations accepted in catalog formulas. Both the English and the Spanish
# rulebook abbreviations are in use across published catalogs.
ATTRIBUTE_TOKENS: dict[str, AttributeType] = {
    "STR": AttributeType.STR,
    "FUE": AttributeType.STR,
    "CON": AttributeType.CON,
    "SIZ": AttributeType.SIZ,
    "TAM": AttributeType.SIZ,
    "DEX": AttributeType.DEX,
    "DES": AttributeType.DEX,
    "APP": AttributeType.APP,
    "APA": AttributeType.APP,
    "INT": AttributeType.INT,
    "POW": AttributeType.POW,
    "POD": AttributeType.POW,
    "EDU": AttributeType.EDU,
    "LUCK": AttributeType.LUCK,
    "SUERTE": AttributeType.LUCK,
}


def attribute_from_token(token: str) -> AttributeType | None:
    """Resolve a formula abbreviation or a full attribute name to its AttributeType."""
    cleaned = token.strip()
    found = ATTRIBUTE_TOKENS.get(cleaned.upper())
    if found is not None:
        return found
    try:
        return AttributeType(cleaned.lower())
    except ValueError:
        return None


class Attributes(BaseModel):
    """
    The nine core attributes of an investigator.

    Values are expected in [1, 99]. The model does not reject values outside
    that range: age penalties can push a value below 1, and that is reported
    by step validation rather than refused here.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    strength: int = Field(description="Physical power")
    constitution: int = Field(description="Health and stamina")
    size: int = Field(description="Height and mass")
    dexterity: int = Field(description="Agility and reflexes")
    appearance: int = Field(description="Physical attractiveness")
    intelligence: int = Field(description="Reasoning and intuition")
    power: int = Field(description="Willpower and magical aptitude")
    education: int = Field(description="Formal knowledge")
    luck: int = Field(description="Fortune")

    def get(self, attribute: AttributeType) -> int:
        """Return the value of one attribute."""
        return int(getattr(self, attribute.value))

    def as_dict(self) -> dict[AttributeType, int]:
        """Return every attribute keyed by AttributeType, in declaration order."""
        return {attribute: self.get(attribute) for attribute in AttributeType}

    def with_values(self, values: dict[AttributeType, int]) -> "Attributes":
        """Return a copy with the given attributes replaced."""
        return self.model_copy(update={attribute.value: value for attribute, value in values.items()})

    def out_of_range(self) -> list[AttributeType]:
        """List the attributes whose value falls outside [1, 99]."""
        return [
            attribute
            for attribute, value in self.as_dict().items()
            if value < ATTRIBUTE_MIN or value > ATTRIBUTE_MAX
        ]


class AgePenaltyAllocation(BaseModel):
    """
    The player's distribution of mandatory age penalty points.

    The youth pair applies to investigators in the youth band, the mature
    triple to those in a mature band. Each group must add up to the band's
    required total; step validation enforces that.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    youth_strength: int = Field(default=0, ge=0, description="Points deducted from STR in the youth band")
    youth_size: int = Field(default=0, ge=0, description="Points deducted from SIZ in the youth band")
    mature_strength: int = Field(default=0, ge=0, description="Points deducted from STR in a mature band")
    mature_constitution: int = Field(default=0, ge=0, description="Points deducted from CON in a mature band")
    mature_dexterity: int = Field(default=0, ge=0, description="Points deducted from DEX in a mature band")

    @property
    def youth_total(self) -> int:
        return self.youth_strength + self.youth_size

    @property
    def mature_total(self) -> int:
        return self.mature_strength + self.mature_constitution + self.mature_dexterity

    def youth_deductions(self) -> dict[AttributeType, int]:
        return {AttributeType.STR: self.youth_strength, AttributeType.SIZ: self.youth_size}

    def mature_deductions(self) -> dict[AttributeType, int]:
        return {
            AttributeType.STR: self.mature_strength,
            AttributeType.CON: self.mature_constitution,
            AttributeType.DEX: self.mature_dexterity,
        }

    @classmethod
    def split_evenly(cls, youth_total: int, mature_total: int) -> "AgePenaltyAllocation":
        """
        Build an allocation that spreads each required total as evenly as possible.

        The remainder goes to SIZ for youth and to DEX for mature bands.
        """
        youth_strength = youth_total // 2
        mature_share = mature_total // 3
        return cls(
            youth_strength=youth_strength,
            youth_size=youth_total - youth_strength,
            mature_strength=mature_share,
            mature_constitution=mature_share,
            mature_dexterity=mature_total - 2 * mature_share,
        )
