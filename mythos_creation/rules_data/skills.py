"""
Investigator skill list (classic era).

Bases follow the investigator handbook. Fighting and Firearms are generic
placeholders: occupations that list them grant every specialization.
"""

from mythos_creation.models.attributes import AttributeType
from mythos_creation.models.catalog import SkillCatalog, SkillDefinition, SkillSpecialization


def _spec(name: str, base: int | None = None, *aliases: str) -> SkillSpecialization:
    return SkillSpecialization(name=name, base=base, aliases=list(aliases))


SKILLS = [
    SkillDefinition(name="Accounting", base=5),
    SkillDefinition(name="Anthropology", base=1),
    SkillDefinition(name="Appraise", base=5),
    SkillDefinition(name="Archaeology", base=1),
    SkillDefinition(
        name="Art/Craft",
        base=5,
        aliases=["Art", "Craft"],
        specializations=[
            _spec("Art/Craft (Acting)"),
            _spec("Art/Craft (Fine Art)"),
            _spec("Art/Craft (Forgery)"),
            _spec("Art/Craft (Literature)"),
            _spec("Art/Craft (Photography)"),
            _spec("Art/Craft (Sculpture)"),
        ],
    ),
    SkillDefinition(name="Charm", base=15),
    SkillDefinition(name="Climb", base=20),
    SkillDefinition(name="Credit Rating", base=0, aliases=["Credit"]),
    SkillDefinition(name="Cthulhu Mythos", base=0, aliases=["Mythos"]),
    SkillDefinition(name="Disguise", base=5),
    SkillDefinition(name="Dodge", base_attribute=AttributeType.DEX, base_divisor=2),
    SkillDefinition(name="Drive Auto", base=20, aliases=["Drive Automobile", "Drive"]),
    SkillDefinition(name="Electrical Repair", base=10),
    SkillDefinition(name="Fast Talk", base=5),
    SkillDefinition(
        name="Fighting",
        base=0,
        generic=True,
        aliases=["Melee", "Close Combat"],
        specializations=[
            _spec("Fighting (Brawl)", 25, "Brawl"),
            _spec("Fighting (Axe)", 15),
            _spec("Fighting (Chainsaw)", 10),
            _spec("Fighting (Flail)", 10),
            _spec("Fighting (Garrote)", 15),
            _spec("Fighting (Spear)", 20),
            _spec("Fighting (Sword)", 20),
            _spec("Fighting (Whip)", 5),
        ],
    ),
    SkillDefinition(
        name="Firearms",
        base=0,
        generic=True,
        specializations=[
            _spec("Firearms (Handgun)", 20, "Handgun"),
            _spec("Firearms (Rifle/Shotgun)", 25, "Rifle", "Shotgun"),
            _spec("Firearms (Bow)", 15),
            _spec("Firearms (Heavy Weapons)", 10),
            _spec("Firearms (Flamethrower)", 10),
            _spec("Firearms (Machine Gun)", 10),
            _spec("Firearms (Submachine Gun)", 15),
        ],
    ),
    SkillDefinition(name="First Aid", base=30),
    SkillDefinition(name="History", base=5),
    SkillDefinition(name="Intimidate", base=15),
    SkillDefinition(name="Jump", base=20),
    SkillDefinition(name="Language (Other)", base=1, aliases=["Other Language", "Language"]),
    SkillDefinition(
        name="Language (Own)",
        base_attribute=AttributeType.EDU,
        base_divisor=1,
        aliases=["Own Language", "Native Language"],
    ),
    SkillDefinition(name="Law", base=5),
    SkillDefinition(name="Library Use", base=20),
    SkillDefinition(name="Listen", base=20),
    SkillDefinition(name="Locksmith", base=1),
    SkillDefinition(name="Mechanical Repair", base=10),
    SkillDefinition(name="Medicine", base=1),
    SkillDefinition(name="Natural World", base=10),
    SkillDefinition(name="Navigate", base=10),
    SkillDefinition(name="Occult", base=5),
    SkillDefinition(name="Operate Heavy Machinery", base=1),
    SkillDefinition(name="Persuade", base=10),
    SkillDefinition(
        name="Pilot",
        base=1,
        specializations=[_spec("Pilot (Aircraft)"), _spec("Pilot (Boat)")],
    ),
    SkillDefinition(name="Psychoanalysis", base=1),
    SkillDefinition(name="Psychology", base=10),
    SkillDefinition(name="Ride", base=5),
    SkillDefinition(
        name="Science",
        base=1,
        specializations=[
            _spec("Science (Astronomy)"),
            _spec("Science (Biology)"),
            _spec("Science (Botany)"),
            _spec("Science (Chemistry)"),
            _spec("Science (Forensics)"),
            _spec("Science (Geology)"),
            _spec("Science (Mathematics)"),
            _spec("Science (Pharmacy)"),
            _spec("Science (Physics)"),
            _spec("Science (Zoology)"),
        ],
    ),
    SkillDefinition(name="Sleight of Hand", base=10),
    SkillDefinition(name="Spot Hidden", base=25),
    SkillDefinition(name="Stealth", base=20),
    SkillDefinition(name="Survival", base=10),
    SkillDefinition(name="Swim", base=20),
    SkillDefinition(name="Throw", base=20),
    SkillDefinition(name="Track", base=10),
]

CLASSIC_SKILLS = SkillCatalog(version="7e-classic-1", skills=SKILLS, wildcard_word="any")
