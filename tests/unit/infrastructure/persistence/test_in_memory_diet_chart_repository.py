"""Unit tests for InMemoryDietChartRepository."""

from datetime import datetime, timezone

import pytest

from domain.diet_chart.core.value_objects.chart_filter import ChartFilter
from domain.diet_chart.core.value_objects.enums import AssignmentSlot, PreparationStatus

AT = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


class TestInMemoryDietChartRepository:
    @pytest.mark.asyncio
    async def test_create_and_get_returns_copies(self, repository, make_chart):
        chart = make_chart()
        await repository.create(chart)

        first = await repository.get_by_id(chart.id)
        first.calories = 9999
        second = await repository.get_by_id(chart.id)

        assert second.calories is None
        assert first is not second

    @pytest.mark.asyncio
    async def test_duplicate_id_rejected(self, repository, make_chart):
        chart = make_chart()
        await repository.create(chart)

        with pytest.raises(ValueError, match="already exists"):
            await repository.create(chart)

    @pytest.mark.asyncio
    async def test_soft_delete_hides_chart(self, repository, stored_chart):
        chart = await stored_chart()

        assert await repository.soft_delete(chart.id) is True
        assert await repository.soft_delete(chart.id) is False
        assert await repository.get_by_id(chart.id) is None
        assert (await repository.get_by_id(chart.id, include_inactive=True)).is_active is False
        assert [c async for c in repository.find_active()] == []

    @pytest.mark.asyncio
    async def test_find_active_applies_filter(self, repository, stored_chart):
        wanted = await stored_chart(patient_id="patient-1")
        await stored_chart(patient_id="patient-2")

        found = [c async for c in repository.find_active(ChartFilter(patient_id="patient-1"))]

        assert [c.id for c in found] == [wanted.id]

    @pytest.mark.asyncio
    async def test_update_missing_chart_returns_none(self, repository):
        assert await repository.update("missing", {"calories": 10}) is None

    @pytest.mark.asyncio
    async def test_transitions_on_sibling_meals_both_survive(self, repository, stored_chart):
        chart = await stored_chart(meal_types=("breakfast", "lunch"))
        breakfast_id, lunch_id = (m.id for m in chart.meals)

        await repository.apply_meal_transition(
            chart.id,
            breakfast_id,
            {"preparation_status": PreparationStatus.READY, "assigned_pantry": "pantry-1"},
            AssignmentSlot.PANTRY,
            "pantry-1",
        )
        await repository.apply_meal_transition(
            chart.id,
            lunch_id,
            {"preparation_status": PreparationStatus.PREPARING, "assigned_pantry": "pantry-2"},
            AssignmentSlot.PANTRY,
            "pantry-2",
        )

        stored = await repository.get_by_id(chart.id)
        assert [(m.preparation_status, m.assigned_pantry) for m in stored.meals] == [
            (PreparationStatus.READY, "pantry-1"),
            (PreparationStatus.PREPARING, "pantry-2"),
        ]

    @pytest.mark.asyncio
    async def test_transition_guard_blocks_other_holder(self, repository, stored_chart):
        chart = await stored_chart()
        meal_id = chart.meals[0].id
        changes = {"preparation_status": PreparationStatus.DELIVERED, "delivery_time": AT}

        claimed = await repository.apply_meal_transition(
            chart.id, meal_id, {**changes, "assigned_delivery": "d1"}, AssignmentSlot.DELIVERY, "d1"
        )
        blocked = await repository.apply_meal_transition(
            chart.id, meal_id, {**changes, "assigned_delivery": "d2"}, AssignmentSlot.DELIVERY, "d2"
        )

        assert claimed is not None
        assert blocked is None
        assert (await repository.get_by_id(chart.id)).meals[0].assigned_delivery == "d1"
