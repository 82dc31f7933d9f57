"""MongoDB people directory.

Reads the ``patients`` and ``users`` collections maintained by the patient
records and user management services. Read-only: this service never writes
to either collection.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import PyMongoError

from domain.shared.errors import PersistenceError
from domain.shared.ports.people_directory import PatientSummary, StaffSummary
from infrastructure.config import get_mongodb_database, get_mongodb_uri

logger = logging.getLogger(__name__)


def _as_text(value: Any) -> Optional[str]:
    return None if value is None else str(value)


class MongoPeopleDirectory:
    """
    MongoDB implementation of IPeopleDirectory port.

    Patient documents: {"_id", "name", "room_number", "bed_number", "floor_number"}
    User documents:    {"_id", "name"}
    """

    def __init__(self, client: Optional[AsyncIOMotorClient[Dict[str, Any]]] = None):
        if client is None:
            uri = get_mongodb_uri()
            if not uri:
                raise ValueError("MONGODB_URI not configured")
            client = AsyncIOMotorClient(uri)
        self._client = client
        db = client[get_mongodb_database()]
        self._patients = db["patients"]
        self._users = db["users"]

    async def patients(self, ids: Iterable[str]) -> Dict[str, PatientSummary]:
        wanted = sorted(set(ids))
        if not wanted:
            return {}
        result: Dict[str, PatientSummary] = {}
        try:
            async for doc in self._patients.find({"_id": {"$in": wanted}}):
                result[str(doc["_id"])] = PatientSummary(
                    id=str(doc["_id"]),
                    name=doc.get("name", ""),
                    room_number=_as_text(doc.get("room_number")),
                    bed_number=_as_text(doc.get("bed_number")),
                    floor_number=_as_text(doc.get("floor_number")),
                )
        except PyMongoError as e:
            logger.error(f"Error resolving patients: error={e}")
            raise PersistenceError("patient lookup failed") from e
        return result

    async def staff(self, ids: Iterable[str]) -> Dict[str, StaffSummary]:
        wanted = sorted(set(ids))
        if not wanted:
            return {}
        result: Dict[str, StaffSummary] = {}
        try:
            async for doc in self._users.find({"_id": {"$in": wanted}}, {"name": 1}):
                result[str(doc["_id"])] = StaffSummary(id=str(doc["_id"]), name=doc.get("name", ""))
        except PyMongoError as e:
            logger.error(f"Error resolving staff: error={e}")
            raise PersistenceError("staff lookup failed") from e
        return result
