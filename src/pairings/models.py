SINGLE_ELIMINATION = 'single-elimination'
DOUBLE_ELIMINATION = 'double-elimination'
SWISS = 'swiss'
ROUND_ROBIN = 'round-robin'
DOUBLE_ROUND_ROBIN = 'double-round-robin'

FORMATS = (SINGLE_ELIMINATION, DOUBLE_ELIMINATION, SWISS, ROUND_ROBIN, DOUBLE_ROUND_ROBIN)

WINNERS_BRACKET = 'winners'
LOSERS_BRACKET = 'losers'
GRAND_FINAL = 'grand-final'


class Player:
    def __init__(self, id, seed=None, match_points=0, opponents=None):
        self.id = id
        self.seed = seed
        self.match_points = match_points
        self.opponents = list(opponents) if opponents else []

    def has_played(self, other):
        """True if either player lists the other as a past opponent."""
        return other.id in self.opponents or self.id in other.opponents

    def __repr__(self):
        return f"Player(id={self.id}, seed={self.seed}, match_points={self.match_points})"


class Match:
    def __init__(self, round, match_number, player_one=None, player_two=None):
        self.round = round
        self.match_number = match_number
        self.player_one = player_one
        self.player_two = player_two
        self.active = False
        self.bye = False
        # Routing targets are (round, match_number) keys, resolved through topology.find_match
        self.winner_path = None
        self.loser_path = None

    @property
    def key(self):
        return (self.round, self.match_number)

    @property
    def players(self):
        return [p for p in (self.player_one, self.player_two) if p is not None]

    def to_dict(self):
        return {
            'round': self.round,
            'match_number': self.match_number,
            'active': self.active,
            'bye': self.bye,
            'player_one': self.player_one.id if self.player_one is not None else None,
            'player_two': self.player_two.id if self.player_two is not None else None,
            'winner_path': list(self.winner_path) if self.winner_path else None,
            'loser_path': list(self.loser_path) if self.loser_path else None,
        }

    def __repr__(self):
        one = self.player_one.id if self.player_one is not None else None
        two = self.player_two.id if self.player_two is not None else None
        return f"Match(round={self.round}, match_number={self.match_number}, players=({one}, {two}), active={self.active})"


class Pairings:
    """All matches of one round.

    ``size`` pre-creates that many empty matches numbered from 1, which is how
    the elimination builders lay out a round before routing it.
    """

    def __init__(self, round, format, size=0, name=None, bracket=None):
        self.round = round
        self.format = format
        self.name = name
        self.bracket = bracket
        self.matches = [Match(round, i + 1) for i in range(size)]

    def add_match(self, player_one=None, player_two=None):
        match = Match(self.round, len(self.matches) + 1, player_one, player_two)
        self.matches.append(match)
        return match

    def to_dict(self):
        return {
            'round': self.round,
            'format': self.format,
            'name': self.name,
            'bracket': self.bracket,
            'matches': [m.to_dict() for m in self.matches],
        }

    def __repr__(self):
        return f"Pairings(round={self.round}, format={self.format}, name={self.name}, matches={len(self.matches)})"
