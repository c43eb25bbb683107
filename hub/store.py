"""
Canonical tournament state.

The store owns groups, slots, people and matches for the life of the
process. Every mutation is a transition method: it either raises a
TournamentError before touching anything, or applies the whole change and
returns a fresh Snapshot.
"""
import logging
import random
from functools import wraps
from typing import List, Optional, Sequence

from .assignment import assign
from .exceptions import GroupNotFound, MatchNotFound, PersonNotFound, ValidationFailure
from .models import (
    GROUP_IDS, NAME_MAX_LENGTH, ROLES, CAPTAIN_ROLE,
    Group, Match, Person, Snapshot,
)
from .schedule import generate_schedule
from .scoreboard import compute_scoreboard
from .slots import SlotGrid

logger = logging.getLogger(__name__)

TEST_PEOPLE_COUNT = 40
TEST_REFEREE_COUNT = 10
TEST_CAPTAIN_COUNT = 8

WINNER_SIDE_1 = 'p1'
WINNER_SIDE_2 = 'p2'
WINNER_CLEAR = 'clear'


def transition(func):
    """
    Mark a store method as a state transition.

    The wrapped method returns a new Snapshot once it completes. Errors are
    re-raised untouched so the caller can decide how to report them.
    """
    @wraps(func)
    def wrapper(self, *args, **kwargs):
        func(self, *args, **kwargs)
        snapshot = self.snapshot()
        logger.debug(f"Transition {func.__name__} applied")
        return snapshot

    return wrapper


class TournamentStore:
    """Single process-wide tournament state."""

    def __init__(self,
                 group_ids: Sequence[str] = GROUP_IDS,
                 roles: Sequence[str] = ROLES,
                 rng: Optional[random.Random] = None):
        self.groups: List[Group] = [
            Group(id=gid, name=f"Group {i}") for i, gid in enumerate(group_ids, start=1)
        ]
        self.slots = SlotGrid(group_ids, roles)
        self.people: List[Person] = []
        self.matches: List[Match] = generate_schedule(group_ids, roles)
        self.rng = rng or random.Random()
        self._next_person_id = 1

    # ==================== Lookups ====================

    def get_group(self, group_id: str) -> Group:
        group = next((g for g in self.groups if g.id == group_id), None)
        if group is None:
            raise GroupNotFound(group_id)
        return group

    def get_person(self, person_id: int) -> Person:
        person = next((p for p in self.people if p.id == person_id), None)
        if person is None:
            raise PersonNotFound(person_id)
        return person

    def get_match(self, match_id: int) -> Match:
        # Ids are 1..N in list order and never change
        if 1 <= match_id <= len(self.matches):
            return self.matches[match_id - 1]
        raise MatchNotFound(match_id)

    # ==================== Snapshot ====================

    def snapshot(self) -> Snapshot:
        scoreboard = compute_scoreboard(self.matches, self.slots, self.people)
        return Snapshot(
            groups=tuple(g.to_dict() for g in self.groups),
            slots=tuple(self.slots.to_list()),
            people=tuple(p.to_dict() for p in self.people),
            matches=tuple(m.to_dict() for m in self.matches),
            scoreboard=tuple(e.to_dict() for e in scoreboard)
        )

    # ==================== Groups ====================

    @transition
    def rename_group(self, group_id: str, name: str):
        group = self.get_group(group_id)
        group.name = name[:NAME_MAX_LENGTH]

    # ==================== Roster ====================

    def _create_person(self, name: str, **flags) -> Person:
        person = Person(id=self._next_person_id, name=name, **flags)
        self._next_person_id += 1
        self.people.append(person)
        return person

    @transition
    def add_person(self, name: str):
        name = name.strip()[:NAME_MAX_LENGTH]
        if not name:
            raise ValidationFailure('name', "Name must not be blank")
        person = self._create_person(name)
        logger.info(f"Added person {person.id} ({person.name})")

    @transition
    def delete_person(self, person_id: int):
        person = self.get_person(person_id)
        self.people.remove(person)
        self.slots.clear_person(person_id)
        logger.info(f"Deleted person {person_id}")

    @transition
    def update_person_flags(self, person_id: int, is_ref: bool, is_captain: bool):
        person = self.get_person(person_id)
        person.is_ref = is_ref
        person.is_captain = is_captain and is_ref

    @transition
    def set_person_selected(self, person_id: int, is_selected: bool):
        person = self.get_person(person_id)
        person.is_selected = is_selected

    @transition
    def add_test_people(self):
        for i in range(1, TEST_PEOPLE_COUNT + 1):
            self._create_person(
                f"Player {i}",
                is_ref=i <= TEST_REFEREE_COUNT,
                is_captain=i <= TEST_CAPTAIN_COUNT,
                is_selected=True
            )
        logger.info(f"Added {TEST_PEOPLE_COUNT} test people")

    @transition
    def clear_people(self):
        self.people = []
        self.slots.clear()
        logger.info("Roster cleared")

    # ==================== Tournament ====================

    @transition
    def randomize_groups(self):
        captains = assign(self.slots, self.people, rng=self.rng, captain_role=CAPTAIN_ROLE)
        logger.info(f"Groups randomized with captains {[c.id for c in captains]}")

    @transition
    def reset_tournament(self):
        for m in self.matches:
            m.clear_result()
        self.slots.clear()
        # Referee status and the roster survive a reset
        for p in self.people:
            p.is_captain = False
        logger.info("Tournament reset")

    @transition
    def set_match_winner(self, match_id: int, winner: str):
        match = self.get_match(match_id)
        if winner == WINNER_SIDE_1:
            match.win1, match.win2 = True, False
        elif winner == WINNER_SIDE_2:
            match.win1, match.win2 = False, True
        elif winner == WINNER_CLEAR:
            match.clear_result()
        else:
            raise ValidationFailure('winner', f"Unknown winner '{winner}'")
