"""
Single elimination bracket generation.

Brackets that are not a power of two get a preliminary round: with
2**k <= n < 2**(k+1), the lowest seeds of the first full round play in
first against the n - 2**k players that do not fit, and the winners take
their slot.
"""
import logging
from typing import List, Tuple

from .models import Pairings, Player, SINGLE_ELIMINATION, WINNERS_BRACKET
from .roster import validate_players
from .seeding import bracket_dimensions, bracket_seeds
from .topology import validate_bracket

logger = logging.getLogger(__name__)


def get_round_name(teams_in_round: int) -> str:
    """Get the name of a round based on number of teams."""
    if teams_in_round == 2:
        return "Final"
    elif teams_in_round == 4:
        return "Semifinal"
    elif teams_in_round == 8:
        return "Quarterfinal"
    else:
        return f"Round of {teams_in_round}"


def build_winners_bracket(players: List[Player], format: str) -> Tuple[List[Pairings], int, int]:
    """
    Lay out and seed the winners side of an elimination bracket.

    Returns (rounds, k, rem). rounds starts with the preliminary round when
    rem > 0, followed by rounds of 2**(k-1), ..., 1 matches, numbered from 1
    and chained so match m feeds match ceil(m / 2) of the next round.

    Preliminary matches are numbered in bracket order: the match feeding the
    earliest open slot of the first full round is match 1.
    """
    k, rem = bracket_dimensions(len(players))
    size = 2 ** k
    seeds = bracket_seeds(k)

    rounds = []
    round_number = 1
    if rem:
        rounds.append(Pairings(round_number, format, rem, name="Preliminary Round", bracket=WINNERS_BRACKET))
        round_number += 1
    for power in range(k - 1, -1, -1):
        rounds.append(Pairings(round_number, format, 2 ** power,
                               name=get_round_name(2 ** (power + 1)), bracket=WINNERS_BRACKET))
        round_number += 1

    main_rounds = rounds[1:] if rem else rounds
    for current, following in zip(main_rounds, main_rounds[1:]):
        for match in current.matches:
            match.winner_path = following.matches[(match.match_number + 1) // 2 - 1].key

    first_full = main_rounds[0]
    for i, match in enumerate(first_full.matches):
        match.player_one = players[seeds[2 * i] - 1]
        match.player_two = players[seeds[2 * i + 1] - 1]
        match.active = True

    if rem:
        # Seeds above the cutoff give up their first-round slot and play in
        # against their complement 2**(k+1) + 1 - seed.
        cutoff = size - rem
        preliminary = rounds[0].matches
        feeder = 0
        for i, match in enumerate(first_full.matches):
            for slot, seed in (('player_one', seeds[2 * i]), ('player_two', seeds[2 * i + 1])):
                if seed <= cutoff:
                    continue
                prelim = preliminary[feeder]
                prelim.player_one = getattr(match, slot)
                prelim.player_two = players[2 * size - seed]
                prelim.winner_path = match.key
                prelim.active = True
                setattr(match, slot, None)
                match.active = False
                feeder += 1

    return rounds, k, rem


def single_elimination(players: List[Player], third_place: bool = False, validate: bool = True) -> List[Pairings]:
    """
    Generate every round of a single elimination bracket.

    Args:
        players: Players in seed order (index 0 is seed 1); never re-sorted.
        third_place: Add a consolation match to the final round that both
            semifinal losers drop into. Ignored below 4 players, where no
            full semifinal round exists.
        validate: Run the structural checks before returning.

    Returns:
        List of Pairings in ascending round order.

    Preliminary matches are numbered in bracket order, not seed order, and
    the better seed of each is player_one. With 5 players the only
    preliminary match is seed 4 against seed 5; with 6 players match 1 is
    seed 4 against seed 5 and match 2 is seed 3 against seed 6.
    """
    validate_players(players)
    rounds, k, rem = build_winners_bracket(players, SINGLE_ELIMINATION)

    if third_place and k >= 2:
        final_round = rounds[-1]
        consolation = final_round.add_match()
        for match in rounds[-2].matches:
            match.loser_path = consolation.key

    if validate:
        validate_bracket(rounds)

    logger.debug("Single elimination for %d players: %d rounds (k=%d, rem=%d)",
                 len(players), len(rounds), k, rem)
    return rounds
