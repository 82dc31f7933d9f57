"""In-memory people directory.

Seedable lookup tables for patients and staff, used in tests and local
development where no patient store is available.
"""

from typing import Dict, Iterable, Optional

from domain.shared.ports.people_directory import PatientSummary, StaffSummary


class InMemoryPeopleDirectory:
    """
    In-memory implementation of IPeopleDirectory port.

    Example:
        >>> directory = InMemoryPeopleDirectory()
        >>> directory.add_patient(PatientSummary(id="p1", name="Ada", room_number="12"))
        >>> await directory.patients(["p1", "missing"])
        {'p1': PatientSummary(id='p1', name='Ada', room_number='12', ...)}
    """

    def __init__(
        self,
        patients: Optional[Iterable[PatientSummary]] = None,
        staff: Optional[Iterable[StaffSummary]] = None,
    ) -> None:
        self._patients: Dict[str, PatientSummary] = {p.id: p for p in patients or ()}
        self._staff: Dict[str, StaffSummary] = {s.id: s for s in staff or ()}

    def add_patient(self, patient: PatientSummary) -> None:
        self._patients[patient.id] = patient

    def add_staff(self, member: StaffSummary) -> None:
        self._staff[member.id] = member

    async def patients(self, ids: Iterable[str]) -> Dict[str, PatientSummary]:
        return {i: self._patients[i] for i in set(ids) if i in self._patients}

    async def staff(self, ids: Iterable[str]) -> Dict[str, StaffSummary]:
        return {i: self._staff[i] for i in set(ids) if i in self._staff}
