from typing import Dict, Iterator, List, Sequence, Tuple

from .models import GROUP_IDS, ROLES, Slot


class SlotGrid:
    """
    The group x role assignment grid.

    Slots are created once, group-major then role order, and never added or
    removed; only their occupant changes.
    """

    def __init__(self, group_ids: Sequence[str] = GROUP_IDS, roles: Sequence[str] = ROLES):
        self._slots: List[Slot] = [Slot(g, r) for g in group_ids for r in roles]
        self._index: Dict[Tuple[str, str], Slot] = {
            (s.group_id, s.role): s for s in self._slots
        }

    def __iter__(self) -> Iterator[Slot]:
        return iter(self._slots)

    def __len__(self) -> int:
        return len(self._slots)

    def slot_for(self, group_id: str, role: str) -> Slot:
        # A missing key is a bug in the caller, so let KeyError through
        return self._index[(group_id, role)]

    def with_role(self, role: str) -> List[Slot]:
        return [s for s in self._slots if s.role == role]

    def without_role(self, role: str) -> List[Slot]:
        return [s for s in self._slots if s.role != role]

    def occupant_of(self, group_id: str, role: str):
        return self.slot_for(group_id, role).person_id

    def clear(self):
        for slot in self._slots:
            slot.person_id = None

    def clear_person(self, person_id: int) -> int:
        """Empty every slot held by person_id. Returns how many were cleared."""
        cleared = 0
        for slot in self._slots:
            if slot.person_id == person_id:
                slot.person_id = None
                cleared += 1
        return cleared

    def to_list(self) -> List[dict]:
        return [s.to_dict() for s in self._slots]
