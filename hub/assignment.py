import logging
import random
from typing import Iterable, List, Optional

from .exceptions import InsufficientCaptains, InsufficientPlayers
from .models import CAPTAIN_ROLE, Person
from .slots import SlotGrid

logger = logging.getLogger(__name__)


def assign(slots: SlotGrid,
           roster: Iterable[Person],
           rng: Optional[random.Random] = None,
           selected_only: bool = True,
           captain_role: str = CAPTAIN_ROLE) -> List[Person]:
    """
    Re-deal the whole grid from the roster.

    Captain-role slots get distinct referee+captain people drawn at random;
    everyone else left in the pool is shuffled into the remaining slots in
    slot order. Validation happens before anything is cleared, so a failed
    call leaves the grid as it was.

    Returns:
        The captains, in the order they were seated.

    Raises:
        InsufficientPlayers: fewer people in the pool than slots
        InsufficientCaptains: fewer captain-eligible people than captain slots
    """
    rng = rng or random.Random()

    pool = [p for p in roster if p.is_selected or not selected_only]
    captain_slots = slots.with_role(captain_role)

    if len(pool) < len(slots):
        raise InsufficientPlayers(len(slots), len(pool))

    eligible = [p for p in pool if p.is_captain_eligible]
    if len(eligible) < len(captain_slots):
        raise InsufficientCaptains(len(captain_slots), len(eligible))

    captains = rng.sample(eligible, len(captain_slots))
    chosen = {p.id for p in captains}
    others = [p for p in pool if p.id not in chosen]
    rng.shuffle(others)

    slots.clear()

    for slot, captain in zip(captain_slots, captains):
        slot.person_id = captain.id

    other_slots = slots.without_role(captain_role)
    for slot, person in zip(other_slots, others):
        slot.person_id = person.id

    if len(others) < len(other_slots):
        logger.info(f"Only {len(others)} players for {len(other_slots)} open slots, rest left empty")

    return captains
