"""Workflow task queries: role-scoped queues, completed work, statistics."""

from application.tasks.queries.delivery_completed import (
    DeliveryCompletedQuery,
    DeliveryCompletedQueryHandler,
)
from application.tasks.queries.delivery_queue import (
    DeliveryQueueQuery,
    DeliveryQueueQueryHandler,
)
from application.tasks.queries.manager_stats import (
    ManagerStatsQuery,
    ManagerStatsQueryHandler,
    StatusCount,
)
from application.tasks.queries.pantry_completed import (
    PantryCompletedQuery,
    PantryCompletedQueryHandler,
)
from application.tasks.queries.pantry_queue import PantryQueueQuery, PantryQueueQueryHandler

__all__ = [
    "DeliveryCompletedQuery",
    "DeliveryCompletedQueryHandler",
    "DeliveryQueueQuery",
    "DeliveryQueueQueryHandler",
    "ManagerStatsQuery",
    "ManagerStatsQueryHandler",
    "PantryCompletedQuery",
    "PantryCompletedQueryHandler",
    "PantryQueueQuery",
    "PantryQueueQueryHandler",
    "StatusCount",
]
