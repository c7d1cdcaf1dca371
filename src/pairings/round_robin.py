"""
Round robin schedules using the circle method (Berger rotation).

The first player stays fixed while everyone else rotates one place per
round. With an odd number of players an empty slot joins the rotation and
whoever meets it has the bye.
"""
import logging
from typing import List, Optional, Tuple

from .models import DOUBLE_ROUND_ROBIN, Pairings, Player, ROUND_ROBIN
from .roster import validate_players

logger = logging.getLogger(__name__)


def berger_rounds(players: List[Player]) -> List[List[Tuple[Optional[Player], Optional[Player]]]]:
    """
    Pairs for every round of a single cycle.

    n - 1 rounds for even n, n rounds for odd n. One side of each pair is
    None when it is a bye.
    """
    slots = list(players)
    if len(slots) % 2:
        slots.append(None)
    count = len(slots)

    schedule = []
    for round_index in range(count - 1):
        pairs = [(slots[i], slots[count - 1 - i]) for i in range(count // 2)]
        if round_index % 2:
            # Alternate sides for the fixed player
            pairs[0] = (pairs[0][1], pairs[0][0])
        schedule.append(pairs)
        slots = [slots[0], slots[-1]] + slots[1:-1]
    return schedule


def _build_round(round_number: int, format: str, pairs, swap_sides: bool) -> Pairings:
    pairings = Pairings(round_number, format, name=f"Round {round_number}")
    byes = []
    for one, two in pairs:
        if one is None or two is None:
            byes.append(one if one is not None else two)
            continue
        if swap_sides:
            one, two = two, one
        match = pairings.add_match(one, two)
        match.active = True
    for player in byes:
        match = pairings.add_match(player, None)
        match.bye = True
    return pairings


def round_robin(players: List[Player], double: bool = False) -> List[Pairings]:
    """
    Generate all rounds of a round robin.

    Args:
        players: Players in seed order.
        double: Play the cycle twice, with sides swapped the second time.

    Returns:
        List of Pairings, one per round; every pair of players meets exactly
        once per cycle.
    """
    validate_players(players)
    format = DOUBLE_ROUND_ROBIN if double else ROUND_ROBIN
    schedule = berger_rounds(players)

    rounds = [_build_round(i + 1, format, pairs, False) for i, pairs in enumerate(schedule)]
    if double:
        offset = len(schedule)
        rounds.extend(_build_round(offset + i + 1, format, pairs, True) for i, pairs in enumerate(schedule))

    logger.debug("%s for %d players: %d rounds", format, len(players), len(rounds))
    return rounds
