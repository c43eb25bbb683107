"""
Inbound client commands.

One dataclass per Socket.IO event. ``from_payload`` validates and
normalizes the raw payload before anything reaches the store, and ``apply``
runs the matching store transition.
"""
from dataclasses import dataclass, asdict
from typing import Any, ClassVar, Dict, Optional, Type

from .exceptions import ValidationFailure
from .models import NAME_MAX_LENGTH, Snapshot
from .store import WINNER_CLEAR, WINNER_SIDE_1, WINNER_SIDE_2, TournamentStore

WINNERS = (WINNER_SIDE_1, WINNER_SIDE_2, WINNER_CLEAR)


def _require_dict(payload: Any) -> dict:
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValidationFailure('payload', "Payload must be an object")
    return payload


def _coerce_id(payload: dict, field: str) -> int:
    value = payload.get(field)
    if value is None or isinstance(value, bool):
        raise ValidationFailure(field, f"'{field}' is required")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationFailure(field, f"'{field}' must be numeric")
    if not number.is_integer():
        raise ValidationFailure(field, f"'{field}' must be a whole number")
    return int(number)


def _text(payload: dict, field: str) -> str:
    value = payload.get(field)
    return str(value) if value is not None else ''


@dataclass
class Command:
    event: ClassVar[str] = ''
    privileged: ClassVar[bool] = True

    @classmethod
    def from_payload(cls, payload: Any) -> "Command":
        _require_dict(payload)
        return cls()

    def apply(self, store: TournamentStore) -> Snapshot:
        raise NotImplementedError

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class LoginAdmin(Command):
    event: ClassVar[str] = 'loginAdmin'
    privileged: ClassVar[bool] = False

    password: str = ''

    @classmethod
    def from_payload(cls, payload: Any) -> "LoginAdmin":
        # Anything but a string can never match the secret
        return cls(password=payload if isinstance(payload, str) else '')

    def to_dict(self) -> dict:
        return {}


@dataclass
class UpdateGroupName(Command):
    event: ClassVar[str] = 'updateGroupName'

    group_id: str = ''
    name: str = ''

    @classmethod
    def from_payload(cls, payload: Any) -> "UpdateGroupName":
        data = _require_dict(payload)
        group_id = data.get('groupId')
        if not isinstance(group_id, str) or not group_id:
            raise ValidationFailure('groupId', "'groupId' is required")
        return cls(group_id=group_id, name=_text(data, 'name')[:NAME_MAX_LENGTH])

    def apply(self, store: TournamentStore) -> Snapshot:
        return store.rename_group(self.group_id, self.name)


@dataclass
class AddPerson(Command):
    event: ClassVar[str] = 'addPerson'

    name: str = ''

    @classmethod
    def from_payload(cls, payload: Any) -> "AddPerson":
        data = _require_dict(payload)
        name = _text(data, 'name').strip()
        if not name:
            raise ValidationFailure('name', "Name must not be blank")
        return cls(name=name[:NAME_MAX_LENGTH])

    def apply(self, store: TournamentStore) -> Snapshot:
        return store.add_person(self.name)


@dataclass
class DeletePerson(Command):
    event: ClassVar[str] = 'deletePerson'

    person_id: int = 0

    @classmethod
    def from_payload(cls, payload: Any) -> "DeletePerson":
        data = _require_dict(payload)
        return cls(person_id=_coerce_id(data, 'personId'))

    def apply(self, store: TournamentStore) -> Snapshot:
        return store.delete_person(self.person_id)


@dataclass
class UpdatePersonFlags(Command):
    event: ClassVar[str] = 'updatePersonFlags'

    person_id: int = 0
    is_ref: bool = False
    is_captain: bool = False

    @classmethod
    def from_payload(cls, payload: Any) -> "UpdatePersonFlags":
        data = _require_dict(payload)
        is_ref = bool(data.get('isRef'))
        return cls(
            person_id=_coerce_id(data, 'personId'),
            is_ref=is_ref,
            is_captain=bool(data.get('isCaptain')) and is_ref
        )

    def apply(self, store: TournamentStore) -> Snapshot:
        return store.update_person_flags(self.person_id, self.is_ref, self.is_captain)


@dataclass
class SetPersonSelected(Command):
    event: ClassVar[str] = 'setPersonSelected'

    person_id: int = 0
    is_selected: bool = False

    @classmethod
    def from_payload(cls, payload: Any) -> "SetPersonSelected":
        data = _require_dict(payload)
        return cls(
            person_id=_coerce_id(data, 'personId'),
            is_selected=bool(data.get('isSelected'))
        )

    def apply(self, store: TournamentStore) -> Snapshot:
        return store.set_person_selected(self.person_id, self.is_selected)


@dataclass
class AddTestPeople(Command):
    event: ClassVar[str] = 'addTestPeople'

    def apply(self, store: TournamentStore) -> Snapshot:
        return store.add_test_people()


@dataclass
class ClearPeople(Command):
    event: ClassVar[str] = 'clearPeople'

    def apply(self, store: TournamentStore) -> Snapshot:
        return store.clear_people()


@dataclass
class RandomizeGroups(Command):
    event: ClassVar[str] = 'randomizeGroups'

    def apply(self, store: TournamentStore) -> Snapshot:
        return store.randomize_groups()


@dataclass
class ResetTournament(Command):
    event: ClassVar[str] = 'resetTournament'

    def apply(self, store: TournamentStore) -> Snapshot:
        return store.reset_tournament()


@dataclass
class SetMatchWinner(Command):
    event: ClassVar[str] = 'setMatchWinner'
    privileged: ClassVar[bool] = False

    match_id: int = 0
    winner: str = WINNER_CLEAR

    @classmethod
    def from_payload(cls, payload: Any) -> "SetMatchWinner":
        data = _require_dict(payload)
        winner = data.get('winner')
        if winner not in WINNERS:
            raise ValidationFailure('winner', f"'winner' must be one of {', '.join(WINNERS)}")
        return cls(match_id=_coerce_id(data, 'matchId'), winner=winner)

    def apply(self, store: TournamentStore) -> Snapshot:
        return store.set_match_winner(self.match_id, self.winner)


COMMAND_TYPES: Dict[str, Type[Command]] = {
    cls.event: cls for cls in (
        LoginAdmin,
        UpdateGroupName,
        AddPerson,
        DeletePerson,
        UpdatePersonFlags,
        SetPersonSelected,
        AddTestPeople,
        ClearPeople,
        RandomizeGroups,
        ResetTournament,
        SetMatchWinner,
    )
}


def command_type_for(event: str) -> Optional[Type[Command]]:
    return COMMAND_TYPES.get(event)


def parse_command(event: str, payload: Any = None) -> Command:
    command_type = command_type_for(event)
    if command_type is None:
        raise ValidationFailure('event', f"Unknown event '{event}'")
    return command_type.from_payload(payload)
