"""
Seed placement for elimination brackets.
"""
from typing import List, Tuple

from .errors import InvalidPlayerCountError


def bracket_dimensions(num_players: int) -> Tuple[int, int]:
    """
    Split a player count into the largest power of two it contains.

    Returns (k, rem) where 2**k <= num_players < 2**(k + 1) and
    rem = num_players - 2**k is the number of preliminary matches needed.
    """
    if num_players < 2:
        raise InvalidPlayerCountError(f"An elimination bracket needs at least 2 players, got {num_players}")
    k = num_players.bit_length() - 1
    return k, num_players - 2 ** k


def bracket_seeds(k: int) -> List[int]:
    """
    Generate the standard seed order for a bracket of 2**k players.

    Consecutive pairs meet in the first full round, so for k=3 the order
    [1, 8, 4, 5, 2, 7, 3, 6] gives 1v8, 4v5, 2v7, 3v6. If all higher seeds
    win, 1 and 2 only meet in the final and 1 meets 3 or 4 in the semifinal.
    """
    if k < 1:
        raise InvalidPlayerCountError(f"Seeding needs a bracket of at least 2 players (k >= 1), got k={k}")
    if k == 1:
        return [1, 2]

    seeds = [1, 4, 2, 3]
    for power in range(3, k + 1):
        # Follow every placed seed with its complement in the doubled bracket
        placed = []
        for seed in seeds:
            placed.extend([seed, 2 ** power + 1 - seed])
        seeds = placed
    return seeds


def loser_fill(num: int, count: int) -> List[int]:
    """
    Order in which a winners round's losers fill a losers round.

    `count` is how many losers rounds have already been filled from the
    winners side. Cycling through identity, reverse, reversed halves and
    swapped halves keeps players who met in the winners bracket from being
    paired again as soon as they drop.
    """
    order = list(range(1, num + 1))
    first_half = order[:num // 2]
    second_half = order[num // 2:]
    step = count % 4
    if step == 0:
        return order
    elif step == 1:
        return order[::-1]
    elif step == 2:
        return first_half[::-1] + second_half[::-1]
    else:
        return second_half + first_half
