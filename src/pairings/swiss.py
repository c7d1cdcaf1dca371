"""
Swiss-system pairing.

Players are grouped by match points and paired inside their score group,
highest group first. Anyone left over (odd group size, or nobody left they
have not already played) is held and carried down into the next group,
where they are paired first. After the last group a single held player
receives the bye; two or more mean the attempt is dead and the whole
pairing is retried with a fresh shuffle.
"""
import logging
import random
from typing import List, Optional

from .errors import InvalidRosterError, PairingInfeasibleError
from .models import Match, Pairings, Player, SWISS
from .roster import validate_players

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 1000


def group_by_score(players: List[Player]) -> List[List[Player]]:
    """Split players into score groups, highest score first, keeping input order within a group."""
    groups = {}
    for player in players:
        groups.setdefault(player.match_points, []).append(player)
    return [groups[score] for score in sorted(groups, reverse=True)]


def pair_score_groups(score_groups: List[List[Player]], round_number: int,
                      rng: random.Random) -> Optional[List[Match]]:
    """
    Make one pairing attempt.

    Returns the matches (bye last) or None if the attempt dead-ended with
    more than one player unpaired. Only the shuffles draw on rng; the input
    groups are not modified.
    """
    held = []
    pairs = []
    for group in score_groups:
        pool = held + rng.sample(group, len(group))
        held = []
        while pool:
            player = pool.pop(0)
            opponent = next((candidate for candidate in pool if not player.has_played(candidate)), None)
            if opponent is None:
                held.append(player)
                continue
            pool.remove(opponent)
            pairs.append((player, opponent))

    if len(held) > 1:
        return None

    matches = []
    for player_one, player_two in pairs:
        match = Match(round_number, len(matches) + 1, player_one, player_two)
        match.active = True
        matches.append(match)
    if held:
        bye = Match(round_number, len(matches) + 1, held[0], None)
        bye.bye = True
        matches.append(bye)
    return matches


def check_feasible(players: List[Player]) -> None:
    """
    Cheap precheck for pairings that can never succeed.

    A player who has already met everyone can only take the bye, so with an
    even number of players, or with more than one such player, no attempt
    can succeed. Passing this check does not guarantee a pairing exists.
    """
    stuck = [p for p in players if all(p.has_played(other) for other in players if other is not p)]
    if stuck and (len(players) % 2 == 0 or len(stuck) > 1):
        raise PairingInfeasibleError(
            f"No legal pairing: {[p.id for p in stuck]} already played every other player")


def swiss(players: List[Player], round_number: int, max_points: Optional[float] = None,
          rng: Optional[random.Random] = None, max_attempts: int = DEFAULT_MAX_ATTEMPTS) -> Pairings:
    """
    Pair one Swiss round.

    Args:
        players: Active players with match_points and opponents filled in.
        round_number: Round the matches belong to.
        max_points: Highest score a player could have by now; scores above it
            are rejected as bad input.
        rng: Source of the score-group shuffles. Pass a seeded
            random.Random for reproducible pairings.
        max_attempts: How many reshuffles to try before giving up.

    Returns:
        Pairings with every played match active and at most one bye match.

    Raises:
        PairingInfeasibleError: if no valid pairing was found.
    """
    validate_players(players)
    if max_points is not None:
        over = [p.id for p in players if p.match_points > max_points]
        if over:
            raise InvalidRosterError(f"Players {over} have more than {max_points} match points")
    check_feasible(players)

    rng = rng or random.Random()
    score_groups = group_by_score(players)

    for attempt in range(1, max_attempts + 1):
        matches = pair_score_groups(score_groups, round_number, rng)
        if matches is not None:
            if attempt > 1:
                logger.debug("Swiss round %d paired after %d attempts", round_number, attempt)
            pairings = Pairings(round_number, SWISS, name=f"Round {round_number}")
            pairings.matches = matches
            return pairings

    logger.warning("Swiss round %d: no pairing found for %d players in %d attempts",
                   round_number, len(players), max_attempts)
    raise PairingInfeasibleError(
        f"Could not pair round {round_number} without rematches after {max_attempts} attempts")
