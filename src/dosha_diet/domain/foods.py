"""Food catalog domain models."""

from dataclasses import dataclass, field
from enum import StrEnum


class DoshaTag(StrEnum):
    """Dosha impact tags carried by catalog foods."""

    VATA = "Vata"
    PITTA = "Pitta"
    KAPHA = "Kapha"
    BALANCING = "Balancing"


class Taste(StrEnum):
    """The six rasas."""

    SWEET = "sweet"
    SOUR = "sour"
    SALTY = "salty"
    PUNGENT = "pungent"
    BITTER = "bitter"
    ASTRINGENT = "astringent"


class Quality(StrEnum):
    """Guna tags describing physical qualities of a food."""

    LIGHT = "light"
    HEAVY = "heavy"
    DRY = "dry"
    UNCTUOUS = "unctuous"
    HOT = "hot"
    COLD = "cold"
    OILY = "oily"
    SMOOTH = "smooth"
    ROUGH = "rough"
    SHARP = "sharp"
    SOFT = "soft"
    STABLE = "stable"
    MOBILE = "mobile"
    LIQUID = "liquid"
    DENSE = "dense"


class Energy(StrEnum):
    """Virya of a food."""

    HEATING = "heating"
    COOLING = "cooling"


class Season(StrEnum):
    """Season tags; ALL marks a food suitable year-round."""

    SPRING = "spring"
    SUMMER = "summer"
    MONSOON = "monsoon"
    AUTUMN = "autumn"
    WINTER = "winter"
    ALL = "all"


class FoodCategory(StrEnum):
    """Food-type category used by meal slot preferences."""

    GRAIN = "grain"
    LEGUME = "legume"
    VEGETABLE = "vegetable"
    FRUIT = "fruit"
    NUT = "nut"
    DAIRY = "dairy"
    PROTEIN = "protein"
    SPICE = "spice"
    ROOT = "root"
    SWEETENER = "sweetener"
    OTHER = "other"


@dataclass(frozen=True)
class MacroProfile:
    """Macronutrients per 100g of a food."""

    calories: float
    protein_g: float
    fat_g: float
    carbs_g: float


@dataclass(frozen=True)
class FoodItem:
    """A catalog food with its Ayurvedic tags, parsed once at load time."""

    id: str | None
    name: str
    macros: MacroProfile
    category: FoodCategory = FoodCategory.OTHER
    dosha_tags: frozenset[DoshaTag] = field(default_factory=frozenset)
    tastes: tuple[Taste, ...] = ()
    qualities: tuple[Quality, ...] = ()
    energy: Energy | None = None
    seasons: frozenset[Season] = field(default_factory=frozenset)
    is_sweetener: bool = False

    @property
    def key(self) -> str:
        """Identity used to de-duplicate foods within a meal."""
        return self.id or self.name
