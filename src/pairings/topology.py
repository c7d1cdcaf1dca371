"""
Lookup and structural checks over a generated set of rounds.

Matches refer to each other through (round, match_number) keys rather than
object references, so every consumer that follows a winner or loser path goes
through find_match() or an index built by index_matches().
"""
import logging
from typing import Dict, Iterator, List, Optional, Tuple

from .errors import BracketStructureError
from .models import Match, Pairings

logger = logging.getLogger(__name__)

MatchKey = Tuple[int, int]


def iter_matches(rounds: List[Pairings]) -> Iterator[Match]:
    for pairings in rounds:
        for match in pairings.matches:
            yield match


def index_matches(rounds: List[Pairings]) -> Dict[MatchKey, Match]:
    return {match.key: match for match in iter_matches(rounds)}


def find_match(rounds: List[Pairings], key: Optional[MatchKey]) -> Optional[Match]:
    """Resolve a routing key to its match, or None for an empty path."""
    if key is None:
        return None
    round_number, match_number = key
    for pairings in rounds:
        if pairings.round == round_number:
            if 1 <= match_number <= len(pairings.matches):
                return pairings.matches[match_number - 1]
            return None
    return None


def feeders(rounds: List[Pairings], key: MatchKey) -> List[Tuple[Match, str]]:
    """All (match, 'winner' | 'loser') edges that lead into the match at key."""
    edges = []
    for match in iter_matches(rounds):
        if match.winner_path == key:
            edges.append((match, 'winner'))
        if match.loser_path == key:
            edges.append((match, 'loser'))
    return edges


def validate_bracket(rounds: List[Pairings]) -> None:
    """
    Check the invariants every elimination bracket must satisfy.

    - rounds are in strictly ascending order
    - match numbers in a round run 1..len(matches)
    - every winner/loser path names an existing match in a later round
    - each match is filled by exactly two sources: assigned players plus
      incoming paths
    - a single final match terminates the winner edges (consolation matches
      fed only by losers are allowed beside it)

    Raises BracketStructureError on the first violation found.
    """
    previous_round = 0
    for pairings in rounds:
        if pairings.round <= previous_round:
            raise BracketStructureError(
                f"Round {pairings.round} follows round {previous_round}; rounds must be strictly ascending")
        previous_round = pairings.round
        for position, match in enumerate(pairings.matches, start=1):
            if match.round != pairings.round or match.match_number != position:
                raise BracketStructureError(
                    f"Match {match.key} is out of place at position {position} of round {pairings.round}")

    index = index_matches(rounds)
    incoming = {key: [] for key in index}
    for match in index.values():
        for kind, path in (('winner', match.winner_path), ('loser', match.loser_path)):
            if path is None:
                continue
            if path not in index:
                raise BracketStructureError(f"Match {match.key} {kind} path {path} does not exist")
            if path[0] <= match.round:
                raise BracketStructureError(
                    f"Match {match.key} {kind} path {path} does not lead to a later round")
            incoming[path].append(kind)

    for key, match in index.items():
        sources = len(match.players) + len(incoming[key])
        if sources != 2:
            raise BracketStructureError(
                f"Match {key} has {len(match.players)} player(s) and {len(incoming[key])} feeder(s); expected 2 in total")

    finals = [
        match for key, match in index.items()
        if match.winner_path is None and (match.players or 'winner' in incoming[key])
    ]
    if len(finals) != 1:
        raise BracketStructureError(
            f"Bracket must converge to a single final, found {[m.key for m in finals]}")

    logger.debug("Validated bracket with %d rounds and %d matches", len(rounds), len(index))
