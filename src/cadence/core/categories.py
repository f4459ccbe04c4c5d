"""Task categories (task types)."""

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum

from .tasks import ValidationError, parse_instant

logger = logging.getLogger(__name__)

DEFAULT_COLORS = [
    "#C6FF00",
    "#FF3B30",
    "#FF9500",
    "#34C759",
    "#00B4D8",
    "#8E44AD",
    "#E94B3C",
    "#1ABC9C",
    "#F39C12",
    "#34495E",
]


class CategoryStatus(Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


def _coerce_status(value: str | None) -> CategoryStatus:
    try:
        return CategoryStatus(value or CategoryStatus.ACTIVE.value)
    except ValueError:
        logger.warning(f"Unknown task type status {value!r}, treating as Active")
        return CategoryStatus.ACTIVE


@dataclass
class Category:
    """A user-defined label with a display colour.

    Categories are deactivated rather than deleted so existing tasks keep
    their label.
    """

    id: str
    name: str
    color: str = DEFAULT_COLORS[0]
    description: str | None = None
    status: CategoryStatus = CategoryStatus.ACTIVE
    created_at: datetime | None = None

    @property
    def is_active(self) -> bool:
        return self.status == CategoryStatus.ACTIVE

    @classmethod
    def from_api(cls, data: dict) -> "Category":
        return cls(
            id=str(data["id"]),
            name=data["name"],
            color=data.get("color") or DEFAULT_COLORS[0],
            description=data.get("description"),
            status=_coerce_status(data.get("status")),
            created_at=parse_instant(data.get("created_at")),
        )


def category_payload(name: str, color: str = DEFAULT_COLORS[0], description: str | None = None) -> dict:
    """Validated insert/update fields for a category."""
    if not name.strip():
        raise ValidationError("Please enter a name for the task type.")
    return {
        "name": name.strip(),
        "description": (description or "").strip() or None,
        "color": color,
    }


def toggle_status(category: Category) -> Category:
    target = CategoryStatus.INACTIVE if category.is_active else CategoryStatus.ACTIVE
    return replace(category, status=target)


def active_only(categories: list[Category]) -> list[Category]:
    """Categories offered in selection menus."""
    return [c for c in categories if c.is_active]
