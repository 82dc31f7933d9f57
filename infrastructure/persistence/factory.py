"""Repository Factory for Persistence Layer.

Environment-based selection with in-memory as the safe default:
- .env (runtime): REPOSITORY_BACKEND=mongodb (production persistence)
- .env.test (pytest): REPOSITORY_BACKEND=inmemory (fast, isolated tests)
- Default: inmemory (if env vars not set)

Usage:
    from infrastructure.persistence.factory import get_diet_chart_repository

    repo = get_diet_chart_repository()  # Singleton, inmemory or mongodb
"""

import logging
from typing import Optional

from domain.shared.ports.diet_chart_repository import IDietChartRepository
from domain.shared.ports.people_directory import IPeopleDirectory
from infrastructure.config import get_mongodb_uri, get_repository_backend
from infrastructure.directory.in_memory import InMemoryPeopleDirectory
from infrastructure.persistence.in_memory.diet_chart_repository import (
    InMemoryDietChartRepository,
)

logger = logging.getLogger(__name__)


def _mongodb_selected() -> bool:
    mode = get_repository_backend()
    if mode == "mongodb":
        if not get_mongodb_uri():
            raise ValueError(
                "REPOSITORY_BACKEND=mongodb but MONGODB_URI not set. "
                "Set MONGODB_URI in .env or use REPOSITORY_BACKEND=inmemory"
            )
        return True
    if mode != "inmemory":
        logger.warning(
            "Unknown REPOSITORY_BACKEND, falling back to inmemory",
            extra={"repository_backend": mode},
        )
    return False


def create_diet_chart_repository() -> IDietChartRepository:
    """Create diet chart repository based on REPOSITORY_BACKEND.

    Values:
        - "inmemory": In-memory repository (default, fast, transient)
        - "mongodb": MongoDB repository (persistent, requires MONGODB_URI)

    Raises:
        ValueError: If mongodb selected but MONGODB_URI not set
    """
    if _mongodb_selected():
        from infrastructure.persistence.mongodb.diet_chart_repository import (
            MongoDietChartRepository,
        )

        return MongoDietChartRepository()

    return InMemoryDietChartRepository()


def create_people_directory() -> IPeopleDirectory:
    """Create the people directory matching REPOSITORY_BACKEND."""
    if _mongodb_selected():
        from infrastructure.directory.mongodb import MongoPeopleDirectory

        return MongoPeopleDirectory()

    return InMemoryPeopleDirectory()


# Singleton instances (lazy initialization)
_diet_chart_repository: Optional[IDietChartRepository] = None
_people_directory: Optional[IPeopleDirectory] = None


def get_diet_chart_repository() -> IDietChartRepository:
    """Get singleton diet chart repository instance."""
    global _diet_chart_repository
    if _diet_chart_repository is None:
        _diet_chart_repository = create_diet_chart_repository()
    return _diet_chart_repository


def get_people_directory() -> IPeopleDirectory:
    """Get singleton people directory instance."""
    global _people_directory
    if _people_directory is None:
        _people_directory = create_people_directory()
    return _people_directory


def reset_repository() -> None:
    """Reset singleton instances.

    Useful for testing to force re-creation with different env vars.
    """
    global _diet_chart_repository, _people_directory
    _diet_chart_repository = None
    _people_directory = None
