"""Shared test fixtures.

Environment is loaded from .env / .env.test when present, then defaults
suitable for isolated runs are applied (in-memory backend, test JWT secret).
"""

from __future__ import annotations

import os
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional, Sequence

import pytest
from dotenv import load_dotenv

# Load .env first (default environment variables)
env_path = Path(__file__).parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)

# Load .env.test (overrides .env values)
env_test_path = Path(__file__).parent.parent / ".env.test"
if env_test_path.exists():
    load_dotenv(env_test_path, override=True)

os.environ.setdefault("REPOSITORY_BACKEND", "inmemory")
os.environ.setdefault("AUTH_JWT_SECRET", "test-secret")

from domain.diet_chart.core.entities.diet_chart import DietChart  # noqa: E402
from domain.diet_chart.core.value_objects.meal_draft import MealDraft  # noqa: E402
from domain.identity.core.caller import CallerIdentity, StaffRole  # noqa: E402
from infrastructure.persistence.in_memory.diet_chart_repository import (  # noqa: E402
    InMemoryDietChartRepository,
)

TODAY = date(2026, 10, 19)
NOON = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def manager() -> CallerIdentity:
    return CallerIdentity(id="manager-1", role=StaffRole.MANAGER)


@pytest.fixture
def pantry() -> CallerIdentity:
    return CallerIdentity(id="pantry-1", role=StaffRole.PANTRY)


@pytest.fixture
def other_pantry() -> CallerIdentity:
    return CallerIdentity(id="pantry-2", role=StaffRole.PANTRY)


@pytest.fixture
def delivery() -> CallerIdentity:
    return CallerIdentity(id="delivery-1", role=StaffRole.DELIVERY)


@pytest.fixture
def other_delivery() -> CallerIdentity:
    return CallerIdentity(id="delivery-2", role=StaffRole.DELIVERY)


@pytest.fixture
def repository() -> InMemoryDietChartRepository:
    """Fresh in-memory repository per test."""
    return InMemoryDietChartRepository()


def build_chart(
    patient_id: str = "patient-1",
    day: date = TODAY,
    meal_types: Sequence[str] = ("breakfast", "lunch"),
    created_at: Optional[datetime] = None,
    **kwargs: Any,
) -> DietChart:
    """Build a valid chart with one meal per type."""
    return DietChart.create(
        patient_id=patient_id,
        date=day,
        created_by="manager-1",
        meals=[MealDraft(type=t, ingredients=(f"{t} dish",)) for t in meal_types],
        now=created_at,
        **kwargs,
    )


@pytest.fixture
def stored_chart(
    repository: InMemoryDietChartRepository,
) -> Callable[..., Awaitable[DietChart]]:
    """Factory fixture: build a chart and store it in ``repository``."""

    async def _stored(**kwargs: Any) -> DietChart:
        return await repository.create(build_chart(**kwargs))

    return _stored


@pytest.fixture
def make_chart() -> Callable[..., DietChart]:
    """Factory fixture: build an unsaved chart (see build_chart)."""
    return build_chart
