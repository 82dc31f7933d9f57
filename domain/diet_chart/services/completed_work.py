"""Decompose → filter → regroup pipeline over chart meals.

Charts are the unit of storage, but completed-work and statistics views
answer questions about individual meals. These helpers flatten charts into
(chart, meal) pairs, filter the pairs with a meal predicate, and fold them
back into chart-shaped records or status counts. Each stage is a plain
function so the grouping and ordering rules can be tested without a store.
"""

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, Iterable, Iterator, List

from domain.diet_chart.core.entities.diet_chart import DietChart
from domain.diet_chart.core.entities.meal import Meal
from domain.diet_chart.core.value_objects.enums import PreparationStatus


@dataclass(frozen=True)
class ChartMeal:
    """One meal paired with its parent chart."""

    chart: DietChart
    meal: Meal


@dataclass
class CompletedWork:
    """
    Chart-shaped record holding only the meals that matched a filter.

    Carries the parent chart's patient, date and creation time, which is
    what completed-work views display and sort on.
    """

    chart_id: str
    patient_id: str
    date: datetime
    created_at: datetime
    meals: List[Meal] = field(default_factory=list)


def flatten(charts: Iterable[DietChart]) -> Iterator[ChartMeal]:
    """Stage 1: one pair per embedded meal, in chart then meal order."""
    for chart in charts:
        for meal in chart.meals:
            yield ChartMeal(chart=chart, meal=meal)


def keep(pairs: Iterable[ChartMeal], predicate: Callable[[Meal], bool]) -> Iterator[ChartMeal]:
    """Stage 2: retain pairs whose meal satisfies ``predicate``."""
    return (pair for pair in pairs if predicate(pair.meal))


def regroup(pairs: Iterable[ChartMeal]) -> List[CompletedWork]:
    """
    Stage 3: fold pairs back into one record per chart id.

    Chart metadata comes from the first pair seen for each chart, and
    records are returned in first-seen order. Charts with no surviving
    pairs never appear.
    """
    groups: Dict[str, CompletedWork] = {}
    for pair in pairs:
        record = groups.get(pair.chart.id)
        if record is None:
            record = CompletedWork(
                chart_id=pair.chart.id,
                patient_id=pair.chart.patient_id,
                date=pair.chart.date,
                created_at=pair.chart.created_at,
            )
            groups[pair.chart.id] = record
        record.meals.append(pair.meal)
    return [record for record in groups.values() if record.meals]


def count_by_status(pairs: Iterable[ChartMeal]) -> Dict[PreparationStatus, int]:
    """Count meals per preparation status; absent statuses are omitted."""
    counts = Counter(pair.meal.preparation_status for pair in pairs)
    return {status: counts[status] for status in PreparationStatus if counts[status]}
