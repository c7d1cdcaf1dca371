"""
Player roster input: loading from YAML and sanity checks shared by all formats.
"""
from typing import List, Optional

import yaml

from .errors import InvalidPlayerCountError, InvalidRosterError
from .models import Player


def validate_players(players: List[Player], minimum: int = 2) -> None:
    """Reject rosters that are too small or reuse a player id."""
    if len(players) < minimum:
        raise InvalidPlayerCountError(f"At least {minimum} players are required, got {len(players)}")
    seen = set()
    for player in players:
        if player.id in seen:
            raise InvalidRosterError(f"Duplicate player id: {player.id}")
        seen.add(player.id)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def player_from_dict(data: dict, position: Optional[int] = None) -> Player:
    """
    Build a Player from one roster entry.

    A single opponent may be given as a scalar instead of a one-item list.
    """
    if not isinstance(data, dict) or 'id' not in data:
        raise InvalidRosterError(f"Roster entry {position} must be a mapping with an 'id'")
    player_id = data['id']

    match_points = data.get('match_points', 0)
    if not _is_number(match_points):
        raise InvalidRosterError(
            f"Roster entry {position} ({player_id}): match_points must be a number, got {match_points!r}")

    seed = data.get('seed', position)
    if seed is not None and not (isinstance(seed, int) and not isinstance(seed, bool)):
        raise InvalidRosterError(f"Roster entry {position} ({player_id}): seed must be an integer, got {seed!r}")

    opponents = data.get('opponents')
    if opponents is None:
        opponents = []
    elif isinstance(opponents, (str, int)) and not isinstance(opponents, bool):
        opponents = [opponents]
    elif not isinstance(opponents, list) or any(isinstance(o, (dict, list)) for o in opponents):
        raise InvalidRosterError(
            f"Roster entry {position} ({player_id}): opponents must be a list of player ids, got {opponents!r}")

    return Player(id=player_id, seed=seed, match_points=match_points, opponents=opponents)


def load_players(file_path: str) -> List[Player]:
    """
    Load players from a YAML roster, keeping file order.

    The file is either a list of entries or a mapping with a 'players' list.
    Each entry needs an 'id' and may carry 'seed', 'match_points' and
    'opponents'. A missing seed defaults to the entry's 1-based position.
    """
    with open(file_path, mode='r', encoding='utf-8') as file:
        try:
            data = yaml.safe_load(file)
        except yaml.YAMLError as e:
            raise InvalidRosterError(f"Could not parse roster {file_path}: {e}") from e

    if isinstance(data, dict):
        data = data.get('players')
    if not isinstance(data, list):
        raise InvalidRosterError(f"Roster {file_path} must contain a list of players")

    players = [player_from_dict(entry, position) for position, entry in enumerate(data, start=1)]
    validate_players(players, minimum=0)
    return players
