"""Reference macros per standard serving, keyed by lower-case food keyword.

Keys are scanned in insertion order. Adding a food only requires a new
entry here.
"""

from collections.abc import Mapping
from types import MappingProxyType

from calorie_snap.domain.nutrition import MacroProfile

FOOD_KNOWLEDGE_BASE: Mapping[str, MacroProfile] = MappingProxyType(
    {
        "egg": MacroProfile(calories=70, protein_g=6, fat_g=5, carbs_g=0),
        "toast": MacroProfile(calories=80, protein_g=3, fat_g=1, carbs_g=15),
        "bread": MacroProfile(calories=80, protein_g=3, fat_g=1, carbs_g=14),
        "oatmeal": MacroProfile(calories=150, protein_g=5, fat_g=3, carbs_g=27),
        "banana": MacroProfile(calories=105, protein_g=1, fat_g=0, carbs_g=27),
        "apple": MacroProfile(calories=95, protein_g=0, fat_g=0, carbs_g=25),
        "yogurt": MacroProfile(calories=100, protein_g=10, fat_g=2, carbs_g=8),
        "milk": MacroProfile(calories=120, protein_g=8, fat_g=5, carbs_g=12),
        "coffee": MacroProfile(calories=5, protein_g=0, fat_g=0, carbs_g=0),
        "chicken": MacroProfile(calories=165, protein_g=31, fat_g=4, carbs_g=0),
        "salmon": MacroProfile(calories=210, protein_g=22, fat_g=13, carbs_g=0),
        "steak": MacroProfile(calories=270, protein_g=26, fat_g=18, carbs_g=0),
        "tofu": MacroProfile(calories=90, protein_g=10, fat_g=5, carbs_g=2),
        "rice": MacroProfile(calories=200, protein_g=4, fat_g=0, carbs_g=45),
        "pasta": MacroProfile(calories=220, protein_g=8, fat_g=1, carbs_g=43),
        "potato": MacroProfile(calories=160, protein_g=4, fat_g=0, carbs_g=37),
        "salad": MacroProfile(calories=50, protein_g=2, fat_g=0, carbs_g=10),
        "broccoli": MacroProfile(calories=55, protein_g=4, fat_g=1, carbs_g=11),
        "avocado": MacroProfile(calories=240, protein_g=3, fat_g=22, carbs_g=13),
        "cheese": MacroProfile(calories=110, protein_g=7, fat_g=9, carbs_g=1),
        "almonds": MacroProfile(calories=165, protein_g=6, fat_g=14, carbs_g=6),
        "peanut butter": MacroProfile(calories=190, protein_g=7, fat_g=16, carbs_g=7),
        "protein shake": MacroProfile(calories=160, protein_g=30, fat_g=2, carbs_g=5),
        "burger": MacroProfile(calories=500, protein_g=25, fat_g=25, carbs_g=40),
        "pizza": MacroProfile(calories=285, protein_g=12, fat_g=10, carbs_g=36),
    }
)


def lookup(keyword: str) -> MacroProfile | None:
    """Return the reference macros for an exact keyword."""
    return FOOD_KNOWLEDGE_BASE.get(keyword)


def keywords() -> list[str]:
    """Return every keyword in scan order."""
    return list(FOOD_KNOWLEDGE_BASE)
