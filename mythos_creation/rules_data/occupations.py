"""
Classic-era occupations.

Each occupation lists its skills, the choice groups the player picks from,
its credit rating range and its occupation skill point formula.
"""

from mythos_creation.models.catalog import ChoiceGroup, Occupation, OccupationCatalog

INTERPERSONAL = ["Charm", "Fast Talk", "Intimidate", "Persuade"]
ANY_SKILL = ["any skill"]


def _group(count: int, options: list[str], label: str) -> ChoiceGroup:
    return ChoiceGroup(count=count, options=list(options), label=label)


OCCUPATIONS = [
    Occupation(
        name="Antiquarian",
        tags=["classic", "lovecraftian"],
        credit_range="30-70",
        points_formula="EDU x4",
        skills=["Appraise", "Art/Craft (any)", "History", "Library Use", "Language (Other)", "Spot Hidden"],
        choice_groups=[
            _group(1, INTERPERSONAL, "Interpersonal skill"),
            _group(1, ANY_SKILL, "Personal or era specialty"),
        ],
    ),
    Occupation(
        name="Athlete",
        tags=["classic"],
        credit_range="9-70",
        points_formula="EDU x2 + (DEX x2 or STR x2)",
        skills=["Climb", "Jump", "Fighting (Brawl)", "Ride", "Swim", "Throw"],
        choice_groups=[
            _group(1, INTERPERSONAL, "Interpersonal skill"),
            _group(1, ANY_SKILL, "Personal or era specialty"),
        ],
    ),
    Occupation(
        name="Author",
        tags=["classic", "lovecraftian"],
        credit_range="9-30",
        points_formula="EDU x4",
        skills=[
            "Art/Craft (Literature)",
            "History",
            "Library Use",
            "Natural World or Occult",
            "Language (Other)",
            "Language (Own)",
            "Psychology",
        ],
        choice_groups=[_group(1, ANY_SKILL, "Personal or era specialty")],
    ),
    Occupation(
        name="Dilettante",
        tags=["classic", "lovecraftian"],
        credit_range="50-99",
        points_formula="EDU x2 + APP x2",
        skills=["Art/Craft (any)", "Firearms", "Language (Other)", "Ride"],
        choice_groups=[
            _group(1, INTERPERSONAL, "Interpersonal skill"),
            _group(3, ANY_SKILL, "Personal or era specialties"),
        ],
    ),
    Occupation(
        name="Doctor of Medicine",
        tags=["classic", "lovecraftian"],
        credit_range="30-80",
        points_formula="EDU x4",
        skills=["First Aid", "Medicine", "Language (Other)", "Psychology", "Science (Biology)", "Science (Pharmacy)"],
        choice_groups=[_group(2, ANY_SKILL, "Academic or personal specialties")],
    ),
    Occupation(
        name="Drifter",
        tags=["classic"],
        credit_range="0-5",
        points_formula="EDU x2 + (APP x2 or DEX x2 or STR x2)",
        skills=["Climb", "Jump", "Listen", "Navigate", "Stealth"],
        choice_groups=[
            _group(1, INTERPERSONAL, "Interpersonal skill"),
            _group(2, ANY_SKILL, "Personal or era specialties"),
        ],
    ),
    Occupation(
        name="Entertainer",
        tags=["classic"],
        credit_range="9-70",
        points_formula="EDU x2 + APP x2",
        skills=["Art/Craft (Acting)", "Disguise", "Listen", "Psychology"],
        choice_groups=[
            _group(2, INTERPERSONAL, "Interpersonal skills"),
            _group(2, ANY_SKILL, "Personal or era specialties"),
        ],
    ),
    Occupation(
        name="Journalist",
        tags=["classic", "lovecraftian"],
        credit_range="9-30",
        points_formula="EDU x4",
        skills=["Art/Craft (Photography)", "History", "Library Use", "Language (Own)", "Psychology"],
        choice_groups=[
            _group(1, INTERPERSONAL, "Interpersonal skill"),
            _group(1, ANY_SKILL, "Personal or era specialty"),
        ],
    ),
    Occupation(
        name="Lawyer",
        tags=["classic"],
        credit_range="30-80",
        points_formula="EDU x4",
        skills=["Accounting", "Law", "Library Use", "Psychology"],
        choice_groups=[
            _group(2, INTERPERSONAL, "Interpersonal skills"),
            _group(2, ANY_SKILL, "Personal or era specialties"),
        ],
    ),
    Occupation(
        name="Parapsychologist",
        tags=["classic", "lovecraftian"],
        credit_range="9-30",
        points_formula="EDU x4",
        skills=[
            "Anthropology",
            "Art/Craft (Photography)",
            "History",
            "Library Use",
            "Occult",
            "Language (Other)",
            "Psychology",
        ],
        choice_groups=[_group(1, ["Cthulhu Mythos", "Science (Astronomy)", "Science (Physics)"], "Esoteric study")],
    ),
    Occupation(
        name="Police Officer",
        tags=["classic"],
        credit_range="9-30",
        points_formula="EDU x2 + (DEX x2 or STR x2)",
        skills=["Fighting (Brawl)", "Firearms", "First Aid", "Law", "Psychology", "Spot Hidden"],
        choice_groups=[
            _group(1, INTERPERSONAL, "Interpersonal skill"),
            _group(1, ["Drive Auto", "Ride"], "Driving or riding"),
        ],
    ),
    Occupation(
        name="Private Investigator",
        tags=["classic", "lovecraftian"],
        credit_range="9-30",
        points_formula="EDU x2 + (DEX x2 or STR x2)",
        skills=["Art/Craft (Photography)", "Disguise", "Law", "Library Use", "Psychology", "Spot Hidden"],
        choice_groups=[
            _group(1, INTERPERSONAL, "Interpersonal skill"),
            _group(1, ["Locksmith", "Fighting", "Firearms", "Drive Auto"], "Investigative specialty"),
        ],
    ),
    Occupation(
        name="Professor",
        tags=["classic", "lovecraftian"],
        credit_range="20-70",
        points_formula="EDU x4",
        skills=["Library Use", "Language (Other)", "Language (Own)", "Psychology"],
        choice_groups=[_group(4, ANY_SKILL, "Academic or personal specialties")],
    ),
    Occupation(
        name="Soldier",
        tags=["classic"],
        credit_range="9-30",
        points_formula="EDU x2 + (DEX x2 or STR x2)",
        skills=["Dodge", "Fighting", "Firearms", "Stealth", "Survival"],
        choice_groups=[
            _group(1, ["Climb", "Swim"], "Climb or Swim"),
            _group(2, ["First Aid", "Mechanical Repair", "Language (Other)"], "Field training"),
        ],
    ),
]

CLASSIC_OCCUPATIONS = OccupationCatalog(
    version="7e-classic-1",
    interpersonal_skill_options=INTERPERSONAL,
    occupations=OCCUPATIONS,
)
