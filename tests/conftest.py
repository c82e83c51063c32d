"""Pytest configuration and fixtures for test suite."""

import sys
from collections.abc import Callable
from datetime import date
from pathlib import Path

import pytest

# Add src directory to path for imports
SRC_PATH = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(SRC_PATH))

from lfmatch.models import FoundItemRecord, LostItemRecord  # noqa: E402

ITEMS_FIXTURES_DIR = Path(__file__).parent / "fixtures" / "items"


@pytest.fixture
def items_dir() -> Path:
    """Path to item fixture files."""
    return ITEMS_FIXTURES_DIR


@pytest.fixture
def make_lost() -> Callable[..., LostItemRecord]:
    """Factory for lost-item records that share nothing by default.

    Defaults are chosen so that a default lost item and a default found
    item score 0 against each other.
    """

    def _factory(
        id: str = "lost_001",
        *,
        item_name: str = "Notebook",
        description: str = "spiral bound",
        category: str = "Books",
        lost_location: str = "Gym",
        lost_date: date = date(2025, 3, 1),
    ) -> LostItemRecord:
        return LostItemRecord(
            id=id,
            item_name=item_name,
            description=description,
            category=category,
            lost_location=lost_location,
            lost_date=lost_date,
        )

    return _factory


@pytest.fixture
def make_found() -> Callable[..., FoundItemRecord]:
    """Factory for found-item records that share nothing by default."""

    def _factory(
        id: str = "found_001",
        *,
        item_name: str = "Headphones",
        description: str = "over ear",
        category: str = "Electronics",
        found_location: str = "Cafeteria",
        found_date: date = date(2025, 6, 1),
        status: str = "verified",
    ) -> FoundItemRecord:
        return FoundItemRecord(
            id=id,
            item_name=item_name,
            description=description,
            category=category,
            found_location=found_location,
            found_date=found_date,
            status=status,
        )

    return _factory
