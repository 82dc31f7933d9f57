"""Integration tests for MongoDietChartRepository against a real database.

Exercises the query translation and the positional meal update on live
documents. Requires REPOSITORY_BACKEND=mongodb and MONGODB_URI.
"""

import os
from datetime import date, datetime, timezone

import pytest
import pytest_asyncio

from domain.diet_chart.core.entities.diet_chart import DietChart
from domain.diet_chart.core.value_objects.chart_filter import ChartFilter, MealCriteria
from domain.diet_chart.core.value_objects.enums import AssignmentSlot, PreparationStatus
from domain.diet_chart.core.value_objects.meal_draft import MealDraft
from infrastructure.persistence.mongodb.diet_chart_repository import MongoDietChartRepository


pytestmark = [
    pytest.mark.mongodb,
    pytest.mark.skipif(
        os.getenv("REPOSITORY_BACKEND") != "mongodb",
        reason="MongoDB integration tests require REPOSITORY_BACKEND=mongodb",
    ),
]


def new_chart(patient_id: str) -> DietChart:
    return DietChart.create(
        patient_id=patient_id,
        date=date(2026, 10, 19),
        created_by="test_manager",
        meals=[MealDraft(type="breakfast"), MealDraft(type="dinner")],
    )


@pytest_asyncio.fixture
async def mongo_repo():
    """Create a MongoDietChartRepository for testing."""
    repo = MongoDietChartRepository()
    yield repo
    # Cleanup: delete all test data
    await repo.collection.delete_many({"patient_id": {"$regex": "^test_patient_"}})
    await repo.close()


@pytest.mark.asyncio
class TestMongoDietChartRepositoryLive:
    async def test_create_and_get(self, mongo_repo):
        chart = new_chart("test_patient_001")

        await mongo_repo.create(chart)
        stored = await mongo_repo.get_by_id(chart.id)

        assert stored == chart

    async def test_transition_touches_only_one_meal(self, mongo_repo):
        chart = new_chart("test_patient_002")
        await mongo_repo.create(chart)
        breakfast, dinner = chart.meals

        await mongo_repo.apply_meal_transition(
            chart.id,
            dinner.id,
            {"preparation_status": PreparationStatus.PREPARING, "assigned_pantry": "p1"},
            AssignmentSlot.PANTRY,
            "p1",
        )
        updated = await mongo_repo.apply_meal_transition(
            chart.id,
            breakfast.id,
            {"preparation_status": PreparationStatus.PREPARING, "assigned_pantry": "p2"},
            AssignmentSlot.PANTRY,
            "p2",
        )

        assert [m.assigned_pantry for m in updated.meals] == ["p2", "p1"]

    async def test_claimed_meal_rejects_other_holder(self, mongo_repo):
        chart = new_chart("test_patient_003")
        await mongo_repo.create(chart)
        meal_id = chart.meals[0].id
        changes = {"preparation_status": PreparationStatus.PREPARING}

        await mongo_repo.apply_meal_transition(
            chart.id, meal_id, dict(changes, assigned_pantry="p1"), AssignmentSlot.PANTRY, "p1"
        )
        lost = await mongo_repo.apply_meal_transition(
            chart.id, meal_id, dict(changes, assigned_pantry="p2"), AssignmentSlot.PANTRY, "p2"
        )

        assert lost is None

    async def test_elem_match_requires_same_meal(self, mongo_repo):
        chart = new_chart("test_patient_004")
        await mongo_repo.create(chart)
        await mongo_repo.apply_meal_transition(
            chart.id,
            chart.meals[0].id,
            {
                "preparation_status": PreparationStatus.READY,
                "assigned_pantry": "p1",
                "delivery_time": datetime(2026, 10, 19, 9, tzinfo=timezone.utc),
            },
            AssignmentSlot.PANTRY,
            "p1",
        )

        ready_for_p1 = ChartFilter(
            patient_id="test_patient_004",
            meal=MealCriteria(statuses=frozenset({PreparationStatus.READY}), assigned_pantry="p1"),
        )
        pending_for_p1 = ChartFilter(
            patient_id="test_patient_004",
            meal=MealCriteria(statuses=frozenset({PreparationStatus.PENDING}), assigned_pantry="p1"),
        )

        assert [c.id async for c in mongo_repo.find_active(ready_for_p1)] == [chart.id]
        assert [c.id async for c in mongo_repo.find_active(pending_for_p1)] == []

    async def test_soft_delete_hides_chart(self, mongo_repo):
        chart = new_chart("test_patient_005")
        await mongo_repo.create(chart)

        assert await mongo_repo.soft_delete(chart.id) is True
        assert await mongo_repo.get_by_id(chart.id) is None
        assert (await mongo_repo.get_by_id(chart.id, include_inactive=True)).is_active is False
        assert await mongo_repo.soft_delete(chart.id) is False

    async def test_chart_edit_keeps_meal_progress(self, mongo_repo):
        chart = new_chart("test_patient_006")
        await mongo_repo.create(chart)
        meal_id = chart.meals[0].id
        await mongo_repo.apply_meal_transition(
            chart.id,
            meal_id,
            {"preparation_status": PreparationStatus.PREPARING, "assigned_pantry": "p1"},
            AssignmentSlot.PANTRY,
            "p1",
        )

        await mongo_repo.update(chart.id, {"calories": 1500})
        stored = await mongo_repo.get_by_id(chart.id)

        assert stored.calories == 1500
        assert stored.meals[0].assigned_pantry == "p1"
        assert stored.meals[0].preparation_status is PreparationStatus.PREPARING
