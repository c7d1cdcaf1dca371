import random

from .config import get_default_settings, merge_settings
from .double_elimination import double_elimination
from .elimination import single_elimination
from .models import DOUBLE_ELIMINATION, DOUBLE_ROUND_ROBIN, ROUND_ROBIN, SINGLE_ELIMINATION, SWISS
from .round_robin import round_robin
from .swiss import swiss


class TournamentFormat:
    def __init__(self, players, settings=None):
        self.players = players
        self.settings = merge_settings(get_default_settings(), settings)
        seed = self.settings['swiss'].get('random_seed')
        self.rng = random.Random(seed)

    def single_elimination(self, third_place=None):
        if third_place is None:
            third_place = self.settings['single_elimination'].get('third_place', False)
        return single_elimination(self.players, third_place=third_place,
                                  validate=self.settings.get('validate_brackets', True))

    def double_elimination(self):
        return double_elimination(self.players, validate=self.settings.get('validate_brackets', True))

    def swiss(self, round_number, max_points=None):
        # Shares one generator across rounds so a fixed random_seed replays the whole event
        return swiss(self.players, round_number, max_points=max_points, rng=self.rng,
                     max_attempts=self.settings['swiss'].get('max_attempts', 1000))

    def round_robin(self):
        return round_robin(self.players)

    def double_round_robin(self):
        return round_robin(self.players, double=True)

    def generate(self, format, **options):
        """Run the generator for a format tag. Swiss returns one Pairings, the rest a list."""
        generators = {
            SINGLE_ELIMINATION: self.single_elimination,
            DOUBLE_ELIMINATION: self.double_elimination,
            SWISS: self.swiss,
            ROUND_ROBIN: self.round_robin,
            DOUBLE_ROUND_ROBIN: self.double_round_robin,
        }
        if format not in generators:
            raise ValueError(f"Unknown tournament format: {format}")
        return generators[format](**options)
