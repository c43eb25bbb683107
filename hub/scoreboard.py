from typing import Dict, Iterable, List

from .models import Match, Person, ScoreboardEntry
from .slots import SlotGrid


def count_wins(matches: Iterable[Match], slots: SlotGrid, people: Iterable[Person]) -> Dict[int, int]:
    """Wins per known person id, credited to whoever currently holds the winning slot."""
    wins = {p.id: 0 for p in people}

    for m in matches:
        if m.win1:
            winner = slots.occupant_of(m.group1_id, m.role1)
            if winner in wins:
                wins[winner] += 1
        if m.win2:
            winner = slots.occupant_of(m.group2_id, m.role2)
            if winner in wins:
                wins[winner] += 1

    return wins


def compute_scoreboard(matches: Iterable[Match], slots: SlotGrid,
                       people: List[Person]) -> List[ScoreboardEntry]:
    """
    Ranking of every person, most wins first, ties by name.
    People without wins are listed too.
    """
    wins = count_wins(matches, slots, people)
    board = [ScoreboardEntry(person_id=p.id, name=p.name, wins=wins[p.id]) for p in people]
    board.sort(key=lambda e: (-e.wins, e.name))
    return board
