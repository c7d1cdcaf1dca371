"""
Double elimination bracket generation.

In double elimination:
- Players must lose twice to be eliminated
- Winners Bracket: players that haven't lost yet
- Losers Bracket: players that have lost once
- Grand Final: winners bracket champion vs losers bracket champion
- Bracket Reset: if the losers bracket champion wins the Grand Final, a
  second match decides the champion

Rounds are numbered winners bracket first, then losers bracket, then the two
grand final rounds, so every winner and loser path leads to a later round.

Losers bracket layout for 2**k <= n < 2**(k+1), rem = n - 2**k:
- rem == 0: rounds of 2**(k-2), 2**(k-2), 2**(k-3), 2**(k-3), ..., 1, 1
- 0 < rem <= 2**(k-1): one extra first round of rem matches
- rem > 2**(k-1): two extra first rounds of rem - 2**(k-1) and 2**(k-1)

The extra rounds absorb the preliminary-round losers, who enter the losers
bracket separately from the first full round's losers.
"""
import logging
from typing import List

from .elimination import build_winners_bracket
from .models import DOUBLE_ELIMINATION, GRAND_FINAL, LOSERS_BRACKET, Pairings, Player
from .roster import validate_players
from .seeding import loser_fill
from .topology import validate_bracket

logger = logging.getLogger(__name__)


def get_losers_round_name(round_num: int, total_losers_rounds: int) -> str:
    """Get the name for a losers bracket round (0-indexed)."""
    rounds_from_end = total_losers_rounds - round_num - 1
    if rounds_from_end == 0:
        return "Losers Final"
    elif rounds_from_end == 1:
        return "Losers Semifinal"
    else:
        return f"Losers Round {round_num + 1}"


def get_winners_round_name(teams_in_round: int) -> str:
    """Get the name for a winners bracket round."""
    if teams_in_round == 2:
        return "Winners Final"
    elif teams_in_round == 4:
        return "Winners Semifinal"
    elif teams_in_round == 8:
        return "Winners Quarterfinal"
    else:
        return f"Winners Round of {teams_in_round}"


def calculate_losers_round_sizes(k: int, rem: int) -> List[int]:
    """
    Match counts of each losers bracket round, in play order.

    For 8 players (k=3, rem=0):
    - L Round 1: 4 first-round losers pair off -> 2 matches
    - L Round 2: 2 W semifinal losers vs 2 L Round 1 winners -> 2 matches
    - L Round 3: 2 L Round 2 winners pair off -> 1 match
    - L Round 4: W final loser vs L Round 3 winner -> 1 match
    """
    half = 2 ** (k - 1)
    sizes = []
    if rem:
        if rem <= half:
            sizes.append(rem)
        else:
            sizes.extend([rem - half, half])
    for power in range(k - 2, -1, -1):
        sizes.extend([2 ** power, 2 ** power])
    return sizes


def double_elimination(players: List[Player], validate: bool = True) -> List[Pairings]:
    """
    Generate every round of a double elimination bracket.

    Args:
        players: Players in seed order (index 0 is seed 1); never re-sorted.
        validate: Run the structural checks before returning.

    Returns:
        List of Pairings: winners bracket rounds, losers bracket rounds, then
        the Grand Final and the conditional Bracket Reset.
    """
    validate_players(players)
    winners, k, rem = build_winners_bracket(players, DOUBLE_ELIMINATION)
    half = 2 ** (k - 1)

    for pairings in winners:
        if pairings.name != "Preliminary Round":
            pairings.name = get_winners_round_name(2 * len(pairings.matches))

    # First full round matches that lost players to the preliminary round.
    # less: losers-round-1 match each one would drop into (one or both slots open)
    # great: first full round matches with both slots open
    first_full = winners[1] if rem else winners[0]
    less = [(m.match_number + 1) // 2 for m in first_full.matches
            if m.player_one is None or m.player_two is None]
    great = [m.match_number for m in first_full.matches
             if m.player_one is None and m.player_two is None]

    round_number = winners[-1].round + 1
    sizes = calculate_losers_round_sizes(k, rem)
    losers = []
    for i, size in enumerate(sizes):
        losers.append(Pairings(round_number, DOUBLE_ELIMINATION, size,
                               name=get_losers_round_name(i, len(sizes)), bracket=LOSERS_BRACKET))
        round_number += 1

    grand_final = Pairings(round_number, DOUBLE_ELIMINATION, 1, name="Grand Final", bracket=GRAND_FINAL)
    bracket_reset = Pairings(round_number + 1, DOUBLE_ELIMINATION, 1, name="Bracket Reset", bracket=GRAND_FINAL)

    fill_count = 0
    next_winners = 0
    next_losers = 0
    first_routed = 0

    if rem == 0:
        if k == 1:
            # Two players: the only loser goes straight to the grand final
            winners[0].matches[0].loser_path = grand_final.matches[0].key
            next_winners = 1
        else:
            order = loser_fill(len(winners[0].matches), fill_count)
            fill_count += 1
            for i, match in enumerate(losers[0].matches):
                winners[0].matches[order[2 * i] - 1].loser_path = match.key
                winners[0].matches[order[2 * i + 1] - 1].loser_path = match.key
            next_winners = 1
            next_losers = 1
    elif rem <= half:
        preliminary, extra = winners[0], losers[0]
        order = loser_fill(len(preliminary.matches), fill_count)
        fill_count += 1
        for i, match in enumerate(extra.matches):
            preliminary.matches[order[i] - 1].loser_path = match.key

        if k == 1:
            # Three players: the extra round is the whole losers bracket
            winners[1].matches[0].loser_path = extra.matches[0].key
            next_winners = 2
            next_losers = 1
            first_routed = 1
        else:
            first_losers = losers[1]
            order = loser_fill(len(first_full.matches), fill_count)
            fill_count += 1
            pending = list(less)
            redirected = 0
            drop = 0
            for match in first_losers.matches:
                for _ in range(2):
                    source = first_full.matches[order[drop] - 1]
                    drop += 1
                    if match.match_number in pending:
                        # Slot is taken by a player coming back through the extra round
                        source.loser_path = extra.matches[redirected].key
                        redirected += 1
                        pending.remove(match.match_number)
                    else:
                        source.loser_path = match.key
            for i, match in enumerate(extra.matches):
                match.winner_path = first_losers.matches[less[i] - 1].key
            next_winners = 2
            next_losers = 2
            first_routed = 1
    else:
        preliminary, extra, second_extra = winners[0], losers[0], losers[1]
        order = loser_fill(len(preliminary.matches), fill_count)
        fill_count += 1
        drop = 0
        paired = 0
        for match in second_extra.matches:
            source = preliminary.matches[order[drop] - 1]
            if match.match_number in great:
                # Both preliminary losers feeding this slot meet first
                source.loser_path = extra.matches[paired].key
                drop += 1
                preliminary.matches[order[drop] - 1].loser_path = extra.matches[paired].key
                paired += 1
            else:
                source.loser_path = match.key
            drop += 1
        for i, match in enumerate(extra.matches):
            match.winner_path = second_extra.matches[great[i] - 1].key
        next_winners = 1
        next_losers = 1
        first_routed = 1

    # Each remaining winners round drops one loser into every match of every
    # other losers round.
    for pairings in winners[next_winners:]:
        target = losers[next_losers]
        order = loser_fill(len(pairings.matches), fill_count)
        fill_count += 1
        for i, match in enumerate(target.matches):
            pairings.matches[order[i] - 1].loser_path = match.key
        next_losers += 2

    for current, following in zip(losers[first_routed:], losers[first_routed + 1:]):
        if len(current.matches) == len(following.matches):
            for i, match in enumerate(current.matches):
                match.winner_path = following.matches[i].key
        else:
            for i, match in enumerate(current.matches):
                match.winner_path = following.matches[i // 2].key

    winners[-1].matches[0].winner_path = grand_final.matches[0].key
    if losers:
        losers[-1].matches[0].winner_path = grand_final.matches[0].key
    grand_final.matches[0].winner_path = bracket_reset.matches[0].key
    grand_final.matches[0].loser_path = bracket_reset.matches[0].key

    rounds = winners + losers + [grand_final, bracket_reset]
    if validate:
        validate_bracket(rounds)

    logger.debug("Double elimination for %d players: %d winners rounds, %d losers rounds (k=%d, rem=%d)",
                 len(players), len(winners), len(losers), k, rem)
    return rounds
