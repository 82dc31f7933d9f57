"""Diet chart queries."""

from application.diet_chart.queries.get_diet_chart import (
    GetDietChartQuery,
    GetDietChartQueryHandler,
)
from application.diet_chart.queries.list_diet_charts import (
    ListDietChartsQuery,
    ListDietChartsQueryHandler,
)

__all__ = [
    "GetDietChartQuery",
    "GetDietChartQueryHandler",
    "ListDietChartsQuery",
    "ListDietChartsQueryHandler",
]
