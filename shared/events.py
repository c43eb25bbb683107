from enum import Enum
from dataclasses import dataclass
from datetime import datetime, timezone
import json


class EventType(str, Enum):
    # Groups
    GROUP_RENAMED = "group.renamed"
    GROUPS_RANDOMIZED = "groups.randomized"

    # Roster
    PERSON_ADDED = "person.added"
    PERSON_DELETED = "person.deleted"
    PERSON_UPDATED = "person.updated"
    ROSTER_SEEDED = "roster.seeded"
    ROSTER_CLEARED = "roster.cleared"

    # Tournament
    TOURNAMENT_RESET = "tournament.reset"
    MATCH_RESULT = "match.result"

    # Sessions
    ADMIN_LOGIN = "session.admin_login"


# Inbound command name -> event published after it commits
COMMAND_EVENTS = {
    'updateGroupName': EventType.GROUP_RENAMED,
    'addPerson': EventType.PERSON_ADDED,
    'deletePerson': EventType.PERSON_DELETED,
    'updatePersonFlags': EventType.PERSON_UPDATED,
    'setPersonSelected': EventType.PERSON_UPDATED,
    'addTestPeople': EventType.ROSTER_SEEDED,
    'clearPeople': EventType.ROSTER_CLEARED,
    'randomizeGroups': EventType.GROUPS_RANDOMIZED,
    'resetTournament': EventType.TOURNAMENT_RESET,
    'setMatchWinner': EventType.MATCH_RESULT,
}


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


@dataclass
class Event:
    type: EventType
    tournament_id: str
    timestamp: str = None
    data: dict = None

    def __post_init__(self):
        if self.timestamp is None:
            self.timestamp = _utc_timestamp()
        if self.data is None:
            self.data = {}

    def to_dict(self) -> dict:
        return {
            "type": self.type.value if isinstance(self.type, EventType) else self.type,
            "tournament_id": self.tournament_id,
            "timestamp": self.timestamp,
            "data": self.data
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: dict) -> "Event":
        return cls(
            type=EventType(data["type"]) if data["type"] in [e.value for e in EventType] else data["type"],
            tournament_id=data["tournament_id"],
            timestamp=data.get("timestamp"),
            data=data.get("data", {})
        )

    @classmethod
    def from_json(cls, json_str: str) -> "Event":
        return cls.from_dict(json.loads(json_str))


def command_event(tournament_id: str, command: str, params: dict) -> Event:
    return Event(
        type=COMMAND_EVENTS.get(command, command),
        tournament_id=tournament_id,
        data={
            "command": command,
            "params": params
        }
    )


def match_result_event(tournament_id: str, match_id: int, winner: str, round_num: int) -> Event:
    return Event(
        type=EventType.MATCH_RESULT,
        tournament_id=tournament_id,
        data={
            "match_id": match_id,
            "winner": winner,
            "round": round_num
        }
    )


def admin_login_event(tournament_id: str, session_id: str, ok: bool) -> Event:
    return Event(
        type=EventType.ADMIN_LOGIN,
        tournament_id=tournament_id,
        data={
            "session_id": session_id,
            "ok": ok
        }
    )
