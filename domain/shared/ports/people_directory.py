"""People directory port.

Patients and staff users are owned by other parts of the hospital system.
The workflow core stores only their ids and uses this read-only port to
resolve them to display form.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Protocol


@dataclass(frozen=True)
class PatientSummary:
    """Display form of a patient."""

    id: str
    name: str
    room_number: Optional[str] = None
    bed_number: Optional[str] = None
    floor_number: Optional[str] = None


@dataclass(frozen=True)
class StaffSummary:
    """Display form of a staff user."""

    id: str
    name: str


class IPeopleDirectory(Protocol):
    """Batch lookups of patients and staff by id.

    Unknown ids are simply absent from the returned mapping.
    """

    async def patients(self, ids: Iterable[str]) -> Dict[str, PatientSummary]:
        ...

    async def staff(self, ids: Iterable[str]) -> Dict[str, StaffSummary]:
        ...
