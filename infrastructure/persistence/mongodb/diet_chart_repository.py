"""MongoDB implementation of diet chart repository.

Provides persistent storage for DietChart aggregates.
Uses MongoBaseRepository for common patterns.
"""

from datetime import datetime, timezone
from typing import Any, AsyncIterator, Dict, Mapping, Optional

from domain.diet_chart.core.entities.diet_chart import DietChart
from domain.diet_chart.core.entities.meal import Meal
from domain.diet_chart.core.value_objects.chart_filter import ChartFilter, MealCriteria
from domain.diet_chart.core.value_objects.enums import AssignmentSlot
from infrastructure.persistence.mongodb.base import MongoBaseRepository


class MongoDietChartRepository(MongoBaseRepository[DietChart]):
    """
    MongoDB implementation of diet chart repository.

    Storage Strategy:
    - Each DietChart is a single MongoDB document
    - Meal objects are embedded as an array of subdocuments
    - Ids stored as UUID strings
    - Datetime fields stored as UTC ISO 8601 strings (microsecond precision)
    - Soft delete: is_active flipped to False, documents never removed

    Document Schema:
    {
        "_id": "uuid-string",            # Chart ID
        "patient_id": "string",
        "date": "2026-10-19T00:00:00.000000+00:00",
        "meals": [
            {
                "id": "uuid-string",
                "meal_type": "lunch",
                "ingredients": ["rice", "steamed fish"],
                "special_instructions": "",
                "preparation_status": "ready",
                "assigned_pantry": "staff-id",
                "assigned_delivery": null,
                "delivery_time": null,
                "delivery_notes": null
            }
        ],
        "dietary_restrictions": ["low-sodium"],
        "calories": 1800,
        "created_by": "staff-id",
        "is_active": true,
        "created_at": "...",
        "updated_at": "..."
    }

    Indexes (see ensure_indexes):
    - patient_id
    - (is_active, date)
    - meals.assigned_pantry, meals.assigned_delivery, meals.preparation_status
    - created_at
    """

    @property
    def collection_name(self) -> str:
        """MongoDB collection name."""
        return "diet_charts"

    # ============================================================
    # Document Mapping (Domain ↔ MongoDB)
    # ============================================================

    def to_document(self, entity: DietChart) -> Dict[str, Any]:
        chart = entity
        return {
            "_id": chart.id,
            "patient_id": chart.patient_id,
            "date": self.datetime_to_iso(chart.date),
            "meals": [self._meal_to_dict(meal) for meal in chart.meals],
            "dietary_restrictions": list(chart.dietary_restrictions),
            "calories": chart.calories,
            "created_by": chart.created_by,
            "is_active": chart.is_active,
            "created_at": self.datetime_to_iso(chart.created_at),
            "updated_at": self.datetime_to_iso(chart.updated_at),
        }

    def from_document(self, doc: Dict[str, Any]) -> DietChart:
        """
        Convert MongoDB document to DietChart entity.

        Raises:
            ValueError: If document is invalid or missing required fields
        """
        try:
            return DietChart(
                id=doc["_id"],
                patient_id=doc["patient_id"],
                date=self.iso_to_datetime(doc["date"]),
                created_by=doc["created_by"],
                meals=[self._dict_to_meal(meal) for meal in doc.get("meals", [])],
                dietary_restrictions=list(doc.get("dietary_restrictions") or []),
                calories=doc.get("calories"),
                is_active=doc.get("is_active", True),
                created_at=self.iso_to_datetime(doc["created_at"]),
                updated_at=self.iso_to_datetime(doc["updated_at"]),
            )
        except KeyError as e:
            raise ValueError(f"Missing required field in MongoDB document: {e}")

    def _meal_to_dict(self, meal: Meal) -> Dict[str, Any]:
        return {
            "id": meal.id,
            "meal_type": meal.meal_type.value,
            "ingredients": list(meal.ingredients),
            "special_instructions": meal.special_instructions,
            "preparation_status": meal.preparation_status.value,
            "assigned_pantry": meal.assigned_pantry,
            "assigned_delivery": meal.assigned_delivery,
            "delivery_time": (
                self.datetime_to_iso(meal.delivery_time) if meal.delivery_time else None
            ),
            "delivery_notes": meal.delivery_notes,
        }

    def _dict_to_meal(self, meal_dict: Dict[str, Any]) -> Meal:
        delivery_time = meal_dict.get("delivery_time")
        return Meal(
            id=meal_dict["id"],
            meal_type=meal_dict["meal_type"],
            ingredients=list(meal_dict.get("ingredients") or []),
            special_instructions=meal_dict.get("special_instructions") or "",
            preparation_status=meal_dict.get("preparation_status", "pending"),
            assigned_pantry=meal_dict.get("assigned_pantry"),
            assigned_delivery=meal_dict.get("assigned_delivery"),
            delivery_time=self.iso_to_datetime(delivery_time) if delivery_time else None,
            delivery_notes=meal_dict.get("delivery_notes"),
        )

    def _workflow_value(self, value: Any) -> Any:
        if isinstance(value, datetime):
            return self.datetime_to_iso(value)
        if hasattr(value, "value"):
            return value.value
        return value

    # ============================================================
    # Filter Translation
    # ============================================================

    def build_query(self, chart_filter: Optional[ChartFilter] = None) -> Dict[str, Any]:
        """
        Translate a ChartFilter into a MongoDB query on active charts.

        Meal criteria become a single ``$elemMatch`` so that every condition
        holds for the same embedded meal.
        """
        query: Dict[str, Any] = {"is_active": True}
        if chart_filter is None:
            return query

        if chart_filter.patient_id is not None:
            query["patient_id"] = chart_filter.patient_id

        date_range: Dict[str, str] = {}
        if chart_filter.date_from is not None:
            date_range["$gte"] = self.datetime_to_iso(chart_filter.date_from)
        if chart_filter.date_until is not None:
            date_range["$lt"] = self.datetime_to_iso(chart_filter.date_until)
        if date_range:
            query["date"] = date_range

        if chart_filter.meal is not None:
            query["meals"] = {"$elemMatch": self._meal_query(chart_filter.meal)}

        return query

    @staticmethod
    def _meal_query(criteria: MealCriteria) -> Dict[str, Any]:
        match: Dict[str, Any] = {}
        if criteria.statuses is not None:
            match["preparation_status"] = {
                "$in": sorted(status.value for status in criteria.statuses)
            }
        if criteria.assigned_pantry is not None:
            match["assigned_pantry"] = criteria.assigned_pantry
        if criteria.assigned_delivery is not None:
            match["assigned_delivery"] = criteria.assigned_delivery
        elif criteria.delivery_unassigned:
            # Matches both null and missing fields
            match["assigned_delivery"] = None
        return match

    # ============================================================
    # Repository Operations (IDietChartRepository interface)
    # ============================================================

    async def create(self, chart: DietChart) -> DietChart:
        await self._insert_one(self.to_document(chart))
        return chart

    async def get_by_id(self, chart_id: str, include_inactive: bool = False) -> Optional[DietChart]:
        filter_dict: Dict[str, Any] = {"_id": chart_id}
        if not include_inactive:
            filter_dict["is_active"] = True

        doc = await self._find_one(filter_dict)
        if doc is None:
            return None
        return self.from_document(doc)

    async def find_active(
        self, chart_filter: Optional[ChartFilter] = None
    ) -> AsyncIterator[DietChart]:
        async for doc in self._iterate(self.build_query(chart_filter)):
            yield self.from_document(doc)

    async def update(
        self, chart_id: str, changes: Mapping[str, Any], **revise_options: Any
    ) -> Optional[DietChart]:
        """
        Merge changes into an active chart.

        Only the fields the edit applied are written, so meal transitions
        landing between the read and the write survive unless ``meals``
        itself is replaced.
        """
        chart = await self.get_by_id(chart_id)
        if chart is None:
            return None

        applied = chart.revise(changes, **revise_options)
        if not applied:
            return chart

        document = self.to_document(chart)
        set_fields = {name: document[name] for name in applied}
        set_fields["updated_at"] = document["updated_at"]
        matched = await self._update_one(
            {"_id": chart_id, "is_active": True}, {"$set": set_fields}
        )
        if not matched:
            return None
        return chart

    async def apply_meal_transition(
        self,
        chart_id: str,
        meal_id: str,
        changes: Dict[str, Any],
        slot: AssignmentSlot,
        caller_id: str,
    ) -> Optional[DietChart]:
        """
        Write one meal's workflow fields with the positional operator.

        Only ``meals.$.<field>`` paths are set, so transitions on other
        meals of the same chart are never overwritten.
        """
        filter_dict = {
            "_id": chart_id,
            "is_active": True,
            "meals": {
                "$elemMatch": {"id": meal_id, slot.value: {"$in": [None, caller_id]}}
            },
        }
        set_fields = {
            f"meals.$.{name}": self._workflow_value(value) for name, value in changes.items()
        }
        set_fields["updated_at"] = self.datetime_to_iso(datetime.now(timezone.utc))

        doc = await self._find_one_and_update(filter_dict, {"$set": set_fields})
        if doc is None:
            return None
        return self.from_document(doc)

    async def soft_delete(self, chart_id: str) -> bool:
        matched = await self._update_one(
            {"_id": chart_id, "is_active": True},
            {
                "$set": {
                    "is_active": False,
                    "updated_at": self.datetime_to_iso(datetime.now(timezone.utc)),
                }
            },
        )
        return matched > 0

    async def ensure_indexes(self) -> None:
        """Create the indexes the workflow queries rely on (idempotent)."""
        await self.collection.create_index("patient_id", name="idx_patient")
        await self.collection.create_index(
            [("is_active", 1), ("date", 1)], name="idx_active_date"
        )
        await self.collection.create_index("meals.assigned_pantry", name="idx_meal_pantry")
        await self.collection.create_index("meals.assigned_delivery", name="idx_meal_delivery")
        await self.collection.create_index("meals.preparation_status", name="idx_meal_status")
        await self.collection.create_index([("created_at", -1)], name="idx_created")
