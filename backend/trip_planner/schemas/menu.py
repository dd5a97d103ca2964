from enum import Enum
from typing import Dict, List, Optional

from pydantic import ConfigDict, Field, field_validator

from trip_planner.core.errors import check_exhaustive
from trip_planner.schemas.base import CamelModel


class DietaryPreference(str, Enum):
    VEGETARIAN = "vegetarian"
    VEGAN = "vegan"
    JAIN = "jain"
    GLUTEN_FREE = "glutenFree"
    NO_ONION_GARLIC = "noOnionGarlic"
    NUT_ALLERGY = "nutAllergy"
    DAIRY_FREE = "dairyFree"


DIETARY_LABELS: Dict[DietaryPreference, str] = {
    DietaryPreference.VEGETARIAN: "Vegetarian (no meat or fish)",
    DietaryPreference.VEGAN: "Vegan (no animal products)",
    DietaryPreference.JAIN: "Jain (no root vegetables, no onion, no garlic)",
    DietaryPreference.GLUTEN_FREE: "Gluten-free",
    DietaryPreference.NO_ONION_GARLIC: "No onion or garlic",
    DietaryPreference.NUT_ALLERGY: "Nut allergy (avoid all nuts)",
    DietaryPreference.DAIRY_FREE: "Dairy-free (no milk products)",
}
check_exhaustive(DIETARY_LABELS, DietaryPreference, "dietary labels")


class SpiceLevel(str, Enum):
    MILD = "mild"
    MEDIUM = "medium"
    SPICY = "spicy"
    VERY_SPICY = "very_spicy"


class MenuTranslationRequest(CamelModel):
    image: str
    dietary_preferences: List[DietaryPreference] = Field(default_factory=list)

    @field_validator("image")
    @classmethod
    def image_required(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("No image provided")
        return value.strip()

    @property
    def image_url(self) -> str:
        """The image as a data URL; bare base64 payloads are assumed to be JPEG."""
        if self.image.startswith(("data:", "http://", "https://")):
            return self.image
        return f"data:image/jpeg;base64,{self.image}"


class Dish(CamelModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    original_name: str
    translated_name: str
    description: str = ""
    ingredients: Optional[List[str]] = None
    dietary_tags: List[str] = Field(default_factory=list)
    spice_level: Optional[SpiceLevel] = None
    price: Optional[str] = None
    is_compatible: bool = True
    warnings: Optional[List[str]] = None

    @field_validator("price", mode="before")
    @classmethod
    def price_as_text(cls, value):
        # Prices are copied off the menu as printed; the model sometimes returns a bare number.
        if value is None or isinstance(value, str):
            return value or None
        return str(value)


class MenuTranslation(CamelModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    menu_language: Optional[str] = None
    restaurant_type: Optional[str] = None
    cultural_notes: Optional[str] = None
    dishes: List[Dish] = Field(default_factory=list)


class MenuTranslationError(CamelModel):
    error: str
    dishes: List[Dish] = Field(default_factory=list)
