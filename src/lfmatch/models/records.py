"""Canonical lost/found item records.

These are the only shapes the scoring layer accepts. Field-name
differences in upstream documents (``dateLost``, ``lastLocation``, ``_id``)
are resolved by :mod:`lfmatch.ingest` before records are built.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any

from lfmatch.utils import to_calendar_date

SCHEMA_VERSION = "1.0.0"

ITEM_CATEGORIES = (
    "Electronics",
    "Books",
    "Accessories",
    "Clothing",
    "ID Cards",
    "Keys",
    "Documents",
    "Others",
)

CLAIMED_STATUS = "claimed"
FOUND_STATUSES = ("pending", CLAIMED_STATUS, "verified", "rejected")


@dataclass(frozen=True)
class LostItemRecord:
    """A report of an item somebody believes they lost.

    Attributes
    ----------
    id : str
        Identifier, unique within the lost-item collection.
    item_name : str
        Short item name (e.g., 'Phone').
    description : str
        Free-text description.
    category : str
        Category label (see ``ITEM_CATEGORIES``).
    lost_location : str
        Where the item was last seen.
    lost_date : date
        Calendar day the item was lost.
    """

    id: str
    item_name: str
    description: str
    category: str
    lost_location: str
    lost_date: date

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LostItemRecord":
        """Build a record from a canonical camelCase document.

        Parameters
        ----------
        data : dict[str, Any]
            Document with ``id``, ``itemName``, ``description``, ``category``,
            ``lostLocation`` and ``lostDate`` (a ``date`` or ISO-8601 string).

        Returns
        -------
        LostItemRecord
            Immutable record.
        """
        return cls(
            id=str(data["id"]),
            item_name=data["itemName"],
            description=data["description"],
            category=data["category"],
            lost_location=data["lostLocation"],
            lost_date=to_calendar_date(data["lostDate"]),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a camelCase dictionary for JSON serialization."""
        return {
            "id": self.id,
            "itemName": self.item_name,
            "description": self.description,
            "category": self.category,
            "lostLocation": self.lost_location,
            "lostDate": self.lost_date.isoformat(),
        }


@dataclass(frozen=True)
class FoundItemRecord:
    """A report of an item somebody turned in or found.

    Attributes
    ----------
    id : str
        Identifier, unique within the found-item collection.
    item_name : str
        Short item name.
    description : str
        Free-text description.
    category : str
        Category label (see ``ITEM_CATEGORIES``).
    found_location : str
        Where the item was found.
    found_date : date
        Calendar day the item was found.
    status : str
        One of ``FOUND_STATUSES``; ``CLAIMED_STATUS`` marks a resolved item.
    """

    id: str
    item_name: str
    description: str
    category: str
    found_location: str
    found_date: date
    status: str

    @property
    def is_claimed(self) -> bool:
        """Whether the item has already been claimed by its owner."""
        return self.status == CLAIMED_STATUS

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FoundItemRecord":
        """Build a record from a canonical camelCase document.

        Parameters
        ----------
        data : dict[str, Any]
            Document with ``id``, ``itemName``, ``description``, ``category``,
            ``foundLocation``, ``foundDate`` and ``status``.

        Returns
        -------
        FoundItemRecord
            Immutable record.
        """
        return cls(
            id=str(data["id"]),
            item_name=data["itemName"],
            description=data["description"],
            category=data["category"],
            found_location=data["foundLocation"],
            found_date=to_calendar_date(data["foundDate"]),
            status=data["status"],
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a camelCase dictionary for JSON serialization."""
        return {
            "id": self.id,
            "itemName": self.item_name,
            "description": self.description,
            "category": self.category,
            "foundLocation": self.found_location,
            "foundDate": self.found_date.isoformat(),
            "status": self.status,
        }

