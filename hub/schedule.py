"""
Fixed match schedule.

Rounds 1-7 are a circle-method round robin between the 8 groups. Every
group-vs-group encounter (an "instance") is played as 4 mini-rounds of 4
rooms, role against role. Round 8 keeps the round 7 pairings but each group
plays an internal round robin among its own roles.
"""
from typing import List, Sequence, Tuple

from .models import GROUP_IDS, ROLES, Match


Pairing = Tuple[str, str]
RolePair = Tuple[str, str]


def round_robin_pairings(group_ids: Sequence[str]) -> List[List[Pairing]]:
    """
    Circle method: the first group stays put, the rest rotate one step per
    round, and position i meets position n-1-i.
    """
    ids = list(group_ids)
    n = len(ids)
    if n < 2 or n % 2 != 0:
        raise ValueError(f"Need an even number of groups, got {n}")

    rounds = []
    for _ in range(n - 1):
        rounds.append([(ids[i], ids[n - 1 - i]) for i in range(n // 2)])
        ids = [ids[0]] + [ids[-1]] + ids[1:-1]

    return rounds


def cross_mini_rounds(roles: Sequence[str] = ROLES) -> List[List[RolePair]]:
    """
    Mini-rounds 1-3 pair role i with role i+k of the other group, which
    covers every ordered cross combination except the same-role ones.
    Mini-round 4 holds the same-role rooms, captains included.
    """
    n = len(roles)
    offsets = list(range(1, n)) + [0]
    return [
        [(roles[i], roles[(i + offset) % n]) for i in range(n)]
        for offset in offsets
    ]


def internal_mini_rounds(roles: Sequence[str] = ROLES) -> List[List[RolePair]]:
    """
    One mini-round per partner of the first role: (A, X) plus the two roles
    left over. The captain never meets itself.
    """
    first = roles[0]
    mini_rounds = []
    for partner in roles[1:]:
        rest = [r for r in roles[1:] if r != partner]
        mini_rounds.append([(first, partner), (rest[0], rest[1])])
    return mini_rounds


def generate_schedule(group_ids: Sequence[str] = GROUP_IDS,
                      roles: Sequence[str] = ROLES) -> List[Match]:
    """
    Build every match of the tournament.

    Ids run from 1 in round, instance, mini-round, room order, so the output
    is identical for identical input.
    """
    pairings = round_robin_pairings(group_ids)
    matches: List[Match] = []

    def add(round_num, instance, mini_round, room, g1, g2, role1, role2):
        matches.append(Match(
            id=len(matches) + 1,
            round_num=round_num,
            instance=instance,
            mini_round=mini_round,
            room=room,
            group1_id=g1,
            group2_id=g2,
            role1=role1,
            role2=role2
        ))

    cross = cross_mini_rounds(roles)
    for round_idx, round_pairs in enumerate(pairings):
        for inst_idx, (g1, g2) in enumerate(round_pairs):
            for mr_idx, role_pairs in enumerate(cross):
                for room_idx, (r1, r2) in enumerate(role_pairs):
                    add(round_idx + 1, inst_idx + 1, mr_idx + 1, room_idx + 1, g1, g2, r1, r2)

    # Internal round: rooms of the first group come before the second's
    internal = internal_mini_rounds(roles)
    final_round = len(pairings) + 1
    for inst_idx, pair in enumerate(pairings[-1]):
        for mr_idx, role_pairs in enumerate(internal):
            room = 1
            for group_id in pair:
                for r1, r2 in role_pairs:
                    add(final_round, inst_idx + 1, mr_idx + 1, room, group_id, group_id, r1, r2)
                    room += 1

    return matches
