"""DietChart aggregate root - one patient's meal plan for one day."""

from dataclasses import dataclass, field
from datetime import date as Date, datetime, timezone, tzinfo
from numbers import Real
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union
from uuid import uuid4

from domain.diet_chart.core.entities.meal import Meal
from domain.diet_chart.core.exceptions.domain_errors import DietChartValidationError
from domain.diet_chart.core.value_objects.meal_draft import MealDraft
from domain.shared.day_window import as_chart_date


# Fields a manager may change through an update
EDITABLE_FIELDS = frozenset({"patient_id", "date", "meals", "dietary_restrictions", "calories"})


@dataclass
class DietChart:
    """
    Aggregate Root: a patient's meal plan for one calendar day.

    Example:
        DietChart = "Room 12, bed B - 19 October"
        ├─ Meal 1 = breakfast (oats, banana)        pending
        ├─ Meal 2 = lunch (rice, steamed fish)      preparing
        └─ Meal 3 = dinner (vegetable soup)         pending

    Invariants:
    - patient_id, date and created_by are present
    - date and timestamps are timezone-aware
    - meal ids are unique within the chart
    - calories, when given, is a non-negative number
    - is_active=False charts are invisible to every non-audit read

    Identity: UUID string
    Mutability: manager edits replace fields wholesale; meal transitions
    mutate a single meal in place
    """

    id: str
    patient_id: str
    date: datetime
    created_by: str
    meals: List[Meal] = field(default_factory=list)
    dietary_restrictions: List[str] = field(default_factory=list)
    calories: Optional[float] = None
    is_active: bool = True

    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        """Validate invariants after initialization."""
        errors = self._field_errors(
            patient_id=self.patient_id,
            date=self.date,
            dietary_restrictions=self.dietary_restrictions,
            calories=self.calories,
        )
        if not self.created_by:
            errors["created_by"] = "created_by is required"
        if "date" not in errors and (
            not isinstance(self.date, datetime) or self.date.tzinfo is None
        ):
            errors["date"] = "date must be a timezone-aware datetime (use UTC)"

        seen = set()
        for index, meal in enumerate(self.meals):
            if meal.id in seen:
                errors[f"meals[{index}].id"] = f"Duplicate meal id {meal.id}"
            seen.add(meal.id)

        for name in ("created_at", "updated_at"):
            if getattr(self, name).tzinfo is None:
                errors[name] = f"{name} must be timezone-aware (use UTC)"

        if errors:
            raise DietChartValidationError(errors)

    # ============================================================
    # Factories
    # ============================================================

    @classmethod
    def create(
        cls,
        *,
        patient_id: Optional[str],
        date: Union[Date, datetime, None],
        created_by: str,
        meals: Sequence[MealDraft] = (),
        dietary_restrictions: Iterable[str] = (),
        calories: Optional[float] = None,
        tz: tzinfo = timezone.utc,
        now: Optional[datetime] = None,
    ) -> "DietChart":
        """
        Create a new chart with a generated id.

        All field problems are reported together in one
        DietChartValidationError; nothing is built when any field is bad.

        Raises:
            DietChartValidationError: If required fields are missing or
                any field is malformed
        """
        restrictions = list(dietary_restrictions or ())
        errors = cls._field_errors(
            patient_id=patient_id,
            date=date,
            dietary_restrictions=restrictions,
            calories=calories,
        )
        errors.update(cls._draft_errors(meals))
        if errors:
            raise DietChartValidationError(errors)

        timestamp = now or datetime.now(timezone.utc)
        return cls(
            id=str(uuid4()),
            patient_id=patient_id,  # type: ignore[arg-type]
            date=as_chart_date(date, tz),  # type: ignore[arg-type]
            created_by=created_by,
            meals=[Meal.from_draft(draft) for draft in meals],
            dietary_restrictions=restrictions,
            calories=calories,
            created_at=timestamp,
            updated_at=timestamp,
        )

    # ============================================================
    # Behaviour
    # ============================================================

    def find_meal(self, meal_id: str) -> Optional[Meal]:
        """Locate a meal by its chart-local id."""
        for meal in self.meals:
            if meal.id == meal_id:
                return meal
        return None

    def revise(
        self,
        changes: Mapping[str, Any],
        tz: tzinfo = timezone.utc,
        now: Optional[datetime] = None,
    ) -> List[str]:
        """
        Merge manager edits into the chart.

        Every change is validated before any field is touched. ``meals``
        replaces the whole sequence; drafts whose id matches an existing
        meal keep that meal's workflow state. A draft id that matches no
        meal is a validation error.

        Args:
            changes: Field name → new value, restricted to EDITABLE_FIELDS
            tz: Ward time zone used to interpret bare dates
            now: Timestamp for updated_at

        Returns:
            Names of the fields that were applied

        Raises:
            DietChartValidationError: If any field is invalid or unknown
        """
        unknown = sorted(set(changes) - EDITABLE_FIELDS)
        errors: Dict[str, str] = {name: "Field cannot be updated" for name in unknown}

        merged = {
            "patient_id": changes.get("patient_id", self.patient_id),
            "date": changes.get("date", self.date),
            "dietary_restrictions": list(
                changes.get("dietary_restrictions", self.dietary_restrictions) or ()
            ),
            "calories": changes.get("calories", self.calories),
        }
        errors.update(self._field_errors(**merged))
        drafts: Sequence[MealDraft] = changes.get("meals") or ()
        errors.update(self._draft_errors(drafts))
        known_ids = {meal.id for meal in self.meals}
        for index, draft in enumerate(drafts):
            if draft.id and draft.id not in known_ids:
                errors[f"meals[{index}].id"] = "Unknown meal id"
        if errors:
            raise DietChartValidationError(errors)

        applied: List[str] = []
        if "patient_id" in changes:
            self.patient_id = merged["patient_id"]
            applied.append("patient_id")
        if "date" in changes:
            self.date = as_chart_date(merged["date"], tz)
            applied.append("date")
        if "dietary_restrictions" in changes:
            self.dietary_restrictions = merged["dietary_restrictions"]
            applied.append("dietary_restrictions")
        if "calories" in changes:
            self.calories = merged["calories"]
            applied.append("calories")
        if "meals" in changes:
            self.meals = [
                Meal.from_draft(draft, self.find_meal(draft.id) if draft.id else None)
                for draft in drafts
            ]
            applied.append("meals")

        if applied:
            self.updated_at = now or datetime.now(timezone.utc)
        return applied

    # ============================================================
    # Validation helpers
    # ============================================================

    @staticmethod
    def _field_errors(
        *,
        patient_id: Any,
        date: Any,
        dietary_restrictions: Any,
        calories: Any,
    ) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        if not patient_id:
            errors["patient"] = "Patient is required"
        if date is None:
            errors["date"] = "Date is required"
        elif not isinstance(date, (Date, datetime)):
            errors["date"] = f"Invalid date: {date!r}"
        for index, label in enumerate(dietary_restrictions or ()):
            if not isinstance(label, str) or not label.strip():
                errors[f"dietary_restrictions[{index}]"] = "Restriction cannot be empty"
        if calories is not None:
            if isinstance(calories, bool) or not isinstance(calories, Real):
                errors["calories"] = "Calories must be a number"
            elif calories < 0:
                errors["calories"] = "Calories cannot be negative"
        return errors

    @staticmethod
    def _draft_errors(drafts: Sequence[MealDraft]) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        seen_ids = set()
        for index, draft in enumerate(drafts):
            errors.update(draft.validation_errors(f"meals[{index}]"))
            if draft.id:
                if draft.id in seen_ids:
                    errors[f"meals[{index}].id"] = f"Duplicate meal id {draft.id}"
                seen_ids.add(draft.id)
        return errors
