from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Category(str, Enum):
    RECYCLE = "recycle"
    COMPOST = "compost"
    TRASH = "trash"


# Display hint per category, consumed by the front-end for styling
CATEGORY_COLORS = {
    Category.RECYCLE: "bg-emerald-500",
    Category.COMPOST: "bg-amber-700",
    Category.TRASH: "bg-slate-600",
}
DEFAULT_COLOR = CATEGORY_COLORS[Category.TRASH]

CATEGORY_ICONS = {
    Category.RECYCLE: "♻️",
    Category.COMPOST: "🌱",
    Category.TRASH: "🗑️",
}


def color_for(category) -> str:
    """Presentation tag for a category; anything unrecognised renders as trash."""
    try:
        return CATEGORY_COLORS[Category(category)]
    except ValueError:
        return DEFAULT_COLOR


def icon_for(category) -> str:
    try:
        return CATEGORY_ICONS[Category(category)]
    except ValueError:
        return CATEGORY_ICONS[Category.TRASH]


class ClassificationResult(BaseModel):
    """
    Normalized disposal classification for one photographed item.
    Immutable once built; lives only for a single request.
    """
    model_config = ConfigDict(frozen=True, use_enum_values=True)

    item: str = Field(..., description="Name of the item the model identified")
    category: Category = Field(..., description="recycle, compost or trash")
    explanation: str = Field(..., description="Why the item belongs in this category")
    color: str = Field(..., description="Presentation tag derived from the category")
