"""Map domain charts to GraphQL types.

Patient and staff references are resolved in one batch per response, so a
list of N charts costs two directory lookups rather than N.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

from domain.diet_chart.core.entities.diet_chart import DietChart
from domain.diet_chart.core.entities.meal import Meal
from domain.diet_chart.services.completed_work import CompletedWork
from domain.shared.ports.people_directory import IPeopleDirectory, PatientSummary, StaffSummary
from graphql_api.types_diet_chart import (
    CompletedWorkType,
    DietChartType,
    MealSlotType,
    PatientType,
    StaffMemberType,
)


@dataclass
class _People:
    patients: Dict[str, PatientSummary]
    staff: Dict[str, StaffSummary]

    def patient(self, patient_id: str) -> Optional[PatientType]:
        summary = self.patients.get(patient_id)
        if summary is None:
            return None
        return PatientType(
            id=summary.id,
            name=summary.name,
            room_number=summary.room_number,
            bed_number=summary.bed_number,
            floor_number=summary.floor_number,
        )

    def staff_member(self, staff_id: Optional[str]) -> Optional[StaffMemberType]:
        if staff_id is None:
            return None
        summary = self.staff.get(staff_id)
        if summary is None:
            return None
        return StaffMemberType(id=summary.id, name=summary.name)


async def _lookup(
    directory: IPeopleDirectory,
    patient_ids: Iterable[str],
    meals: Iterable[Meal],
    creator_ids: Iterable[str] = (),
) -> _People:
    staff_ids = set(creator_ids)
    for meal in meals:
        if meal.assigned_pantry:
            staff_ids.add(meal.assigned_pantry)
        if meal.assigned_delivery:
            staff_ids.add(meal.assigned_delivery)
    return _People(
        patients=await directory.patients(set(patient_ids)),
        staff=await directory.staff(staff_ids),
    )


def _map_meal(meal: Meal, people: _People) -> MealSlotType:
    return MealSlotType(
        id=meal.id,
        type=meal.meal_type,
        ingredients=list(meal.ingredients),
        special_instructions=meal.special_instructions,
        preparation_status=meal.preparation_status,
        assigned_pantry_id=meal.assigned_pantry,
        assigned_pantry=people.staff_member(meal.assigned_pantry),
        assigned_delivery_id=meal.assigned_delivery,
        assigned_delivery=people.staff_member(meal.assigned_delivery),
        delivery_time=meal.delivery_time,
        delivery_notes=meal.delivery_notes,
    )


def _map_chart(chart: DietChart, people: _People) -> DietChartType:
    return DietChartType(
        id=chart.id,
        patient_id=chart.patient_id,
        patient=people.patient(chart.patient_id),
        date=chart.date,
        meals=[_map_meal(meal, people) for meal in chart.meals],
        dietary_restrictions=list(chart.dietary_restrictions),
        calories=chart.calories,
        created_by_id=chart.created_by,
        created_by=people.staff_member(chart.created_by),
        is_active=chart.is_active,
        created_at=chart.created_at,
        updated_at=chart.updated_at,
    )


async def map_diet_charts_to_graphql(
    charts: Sequence[DietChart], directory: IPeopleDirectory
) -> List[DietChartType]:
    """Map charts, resolving patients, creators and assignees."""
    people = await _lookup(
        directory,
        patient_ids=(chart.patient_id for chart in charts),
        meals=(meal for chart in charts for meal in chart.meals),
        creator_ids=(chart.created_by for chart in charts),
    )
    return [_map_chart(chart, people) for chart in charts]


async def map_diet_chart_to_graphql(
    chart: DietChart, directory: IPeopleDirectory
) -> DietChartType:
    """Map a single chart."""
    return (await map_diet_charts_to_graphql([chart], directory))[0]


async def map_completed_work_to_graphql(
    records: Sequence[CompletedWork], directory: IPeopleDirectory
) -> List[CompletedWorkType]:
    """Map completed-work records, resolving patients and assignees."""
    people = await _lookup(
        directory,
        patient_ids=(record.patient_id for record in records),
        meals=(meal for record in records for meal in record.meals),
    )
    return [
        CompletedWorkType(
            chart_id=record.chart_id,
            patient_id=record.patient_id,
            patient=people.patient(record.patient_id),
            date=record.date,
            created_at=record.created_at,
            meals=[_map_meal(meal, people) for meal in record.meals],
        )
        for record in records
    ]
