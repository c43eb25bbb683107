from dataclasses import dataclass
from typing import List, Optional, Tuple


ROLES: Tuple[str, ...] = ('A', 'B', 'C', 'D')
CAPTAIN_ROLE = 'A'

GROUP_COUNT = 8
GROUP_IDS: Tuple[str, ...] = tuple(f"G{i}" for i in range(1, GROUP_COUNT + 1))

NAME_MAX_LENGTH = 50


@dataclass
class Group:
    id: str
    name: str

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name}


@dataclass
class Slot:
    group_id: str
    role: str
    person_id: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        return self.person_id is None

    def to_dict(self) -> dict:
        return {
            "groupId": self.group_id,
            "letter": self.role,
            "personId": self.person_id
        }


@dataclass
class Person:
    id: int
    name: str
    is_ref: bool = False
    is_captain: bool = False
    is_selected: bool = False

    @property
    def is_captain_eligible(self) -> bool:
        return self.is_ref and self.is_captain

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "isRef": self.is_ref,
            "isCaptain": self.is_captain,
            "isSelected": self.is_selected
        }


@dataclass
class Match:
    id: int
    round_num: int
    instance: int
    mini_round: int
    room: int
    group1_id: str
    group2_id: str
    role1: str
    role2: str
    win1: bool = False
    win2: bool = False

    @property
    def is_internal(self) -> bool:
        return self.group1_id == self.group2_id

    @property
    def is_decided(self) -> bool:
        return self.win1 or self.win2

    def clear_result(self):
        self.win1 = False
        self.win2 = False

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "round": self.round_num,
            "instance": self.instance,
            "miniRound": self.mini_round,
            "room": self.room,
            "group1Id": self.group1_id,
            "group2Id": self.group2_id,
            "player1Letter": self.role1,
            "player2Letter": self.role2,
            "win1": self.win1,
            "win2": self.win2
        }


@dataclass(frozen=True)
class ScoreboardEntry:
    person_id: int
    name: str
    wins: int

    def to_dict(self) -> dict:
        return {"personId": self.person_id, "name": self.name, "wins": self.wins}


@dataclass(frozen=True)
class Snapshot:
    """
    Complete serialized tournament state sent to viewers.
    Built from copies, so later mutations of the store never leak into it.
    """
    groups: Tuple[dict, ...] = ()
    slots: Tuple[dict, ...] = ()
    people: Tuple[dict, ...] = ()
    matches: Tuple[dict, ...] = ()
    scoreboard: Tuple[dict, ...] = ()

    def to_dict(self) -> dict:
        return {
            "groups": list(self.groups),
            "slots": list(self.slots),
            "people": list(self.people),
            "matches": list(self.matches),
            "scoreboard": list(self.scoreboard)
        }

    def person(self, person_id: int) -> Optional[dict]:
        return next((p for p in self.people if p["id"] == person_id), None)

    def occupants(self) -> List[int]:
        return [s["personId"] for s in self.slots if s["personId"] is not None]
