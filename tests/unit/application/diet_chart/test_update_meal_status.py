"""Unit tests for UpdateMealStatusCommand and handler."""

from copy import deepcopy
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from application.diet_chart.commands.update_meal_status import (
    UpdateMealStatusCommand,
    UpdateMealStatusCommandHandler,
)
from domain.diet_chart.core.exceptions.domain_errors import (
    DietChartNotFoundError,
    DietChartValidationError,
    MealAlreadyClaimedError,
    MealNotFoundError,
    TransitionForbiddenError,
)
from domain.diet_chart.core.value_objects.enums import PreparationStatus
from domain.shared.errors import UnauthenticatedError

DELIVERED_AT = datetime(2026, 10, 19, 12, 45, tzinfo=timezone.utc)


@pytest.fixture
def handler(repository):
    return UpdateMealStatusCommandHandler(repository=repository, clock=lambda: DELIVERED_AT)


def _command(caller, chart, status, meal_index=0):
    return UpdateMealStatusCommand(
        caller=caller,
        chart_id=chart.id,
        meal_id=chart.meals[meal_index].id,
        status=status,
    )


class TestUpdateMealStatusCommandHandler:
    """Test UpdateMealStatusCommandHandler."""

    @pytest.mark.asyncio
    async def test_full_meal_lifecycle(self, handler, stored_chart, pantry, delivery):
        chart = await stored_chart(meal_types=("breakfast", "lunch"))

        result = await handler.handle(_command(pantry, chart, "preparing"))
        breakfast, lunch = result.meals
        assert breakfast.preparation_status == PreparationStatus.PREPARING
        assert breakfast.assigned_pantry == pantry.id
        assert lunch.preparation_status == PreparationStatus.PENDING
        assert lunch.assigned_pantry is None

        result = await handler.handle(_command(pantry, chart, "ready"))
        assert result.meals[0].preparation_status == PreparationStatus.READY

        result = await handler.handle(_command(delivery, chart, PreparationStatus.DELIVERED))
        breakfast = result.meals[0]
        assert breakfast.preparation_status == PreparationStatus.DELIVERED
        assert breakfast.assigned_delivery == delivery.id
        assert breakfast.delivery_time == DELIVERED_AT
        # Pantry assignment untouched by delivery
        assert breakfast.assigned_pantry == pantry.id

    @pytest.mark.asyncio
    async def test_pantry_transition_leaves_delivery_untouched(
        self, handler, repository, stored_chart, pantry, delivery
    ):
        chart = await stored_chart()
        await handler.handle(_command(delivery, chart, "delivered"))

        result = await handler.handle(_command(pantry, chart, "ready"))

        meal = result.meals[0]
        assert meal.assigned_pantry == pantry.id
        assert meal.assigned_delivery == delivery.id
        assert meal.delivery_time == DELIVERED_AT

    @pytest.mark.asyncio
    async def test_delivery_may_skip_straight_from_pending(self, handler, stored_chart, delivery):
        chart = await stored_chart()

        result = await handler.handle(_command(delivery, chart, "delivered"))

        assert result.meals[0].preparation_status == PreparationStatus.DELIVERED

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", ["preparing", "ready", "delivered", "pending"])
    async def test_manager_always_forbidden(self, handler, repository, stored_chart, manager, status):
        chart = await stored_chart()

        with pytest.raises(TransitionForbiddenError):
            await handler.handle(_command(manager, chart, status))

        stored = await repository.get_by_id(chart.id)
        assert stored.meals[0].preparation_status == PreparationStatus.PENDING

    @pytest.mark.asyncio
    async def test_manager_with_unknown_status_is_forbidden(self, handler, stored_chart, manager):
        chart = await stored_chart()

        with pytest.raises(TransitionForbiddenError) as exc_info:
            await handler.handle(_command(manager, chart, "burnt"))

        assert exc_info.value.target == "burnt"

    @pytest.mark.asyncio
    async def test_pantry_cannot_deliver(self, handler, stored_chart, pantry):
        chart = await stored_chart()

        with pytest.raises(TransitionForbiddenError) as exc_info:
            await handler.handle(_command(pantry, chart, "delivered"))

        assert exc_info.value.code == "FORBIDDEN"

    @pytest.mark.asyncio
    async def test_delivery_cannot_prepare(self, handler, stored_chart, delivery):
        chart = await stored_chart()

        with pytest.raises(TransitionForbiddenError):
            await handler.handle(_command(delivery, chart, "preparing"))

    @pytest.mark.asyncio
    async def test_claimed_meal_rejected_for_other_staff(
        self, handler, repository, stored_chart, pantry, other_pantry
    ):
        chart = await stored_chart()
        await handler.handle(_command(pantry, chart, "preparing"))

        with pytest.raises(MealAlreadyClaimedError) as exc_info:
            await handler.handle(_command(other_pantry, chart, "ready"))

        assert exc_info.value.holder == pantry.id
        stored = await repository.get_by_id(chart.id)
        assert stored.meals[0].assigned_pantry == pantry.id
        assert stored.meals[0].preparation_status == PreparationStatus.PREPARING

    @pytest.mark.asyncio
    async def test_unknown_status_is_validation_error(self, handler, stored_chart, pantry):
        chart = await stored_chart()

        with pytest.raises(DietChartValidationError) as exc_info:
            await handler.handle(_command(pantry, chart, "burnt"))

        assert "status" in exc_info.value.fields

    @pytest.mark.asyncio
    async def test_unknown_chart_not_found(self, handler, pantry):
        command = UpdateMealStatusCommand(
            caller=pantry, chart_id="missing", meal_id="m1", status="ready"
        )

        with pytest.raises(DietChartNotFoundError):
            await handler.handle(command)

    @pytest.mark.asyncio
    async def test_unknown_meal_not_found(self, handler, stored_chart, pantry):
        chart = await stored_chart()
        command = UpdateMealStatusCommand(
            caller=pantry, chart_id=chart.id, meal_id="missing", status="ready"
        )

        with pytest.raises(MealNotFoundError):
            await handler.handle(command)

    @pytest.mark.asyncio
    async def test_deleted_chart_not_found(self, handler, repository, stored_chart, pantry):
        chart = await stored_chart()
        await repository.soft_delete(chart.id)

        with pytest.raises(DietChartNotFoundError):
            await handler.handle(_command(pantry, chart, "ready"))

    @pytest.mark.asyncio
    async def test_anonymous_rejected(self, handler, stored_chart):
        chart = await stored_chart()

        with pytest.raises(UnauthenticatedError):
            await handler.handle(_command(None, chart, "ready"))

    @pytest.mark.asyncio
    async def test_lost_race_reports_claim(self, make_chart, pantry):
        """Slot claimed between read and write surfaces as MealAlreadyClaimedError."""
        chart = make_chart()
        claimed = deepcopy(chart)
        claimed.meals[0].assigned_pantry = "pantry-9"

        mock_repository = AsyncMock()
        mock_repository.get_by_id.side_effect = [chart, claimed]
        mock_repository.apply_meal_transition.return_value = None
        handler = UpdateMealStatusCommandHandler(repository=mock_repository)

        with pytest.raises(MealAlreadyClaimedError) as exc_info:
            await handler.handle(_command(pantry, chart, "ready"))

        assert exc_info.value.holder == "pantry-9"
        mock_repository.apply_meal_transition.assert_awaited_once()
