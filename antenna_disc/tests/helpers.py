from collections import Counter

from antenna_disc.store import InMemoryPatternStore


ANT1_ROWS = [
    (0.0, 30.0, 28.0, 30.0, 28.0),
    (10.0, 25.0, 20.0, 25.0, 20.0),
    (20.0, 15.0, 10.0, 15.0, 10.0),
]

# full-plane pattern sampled to 350 deg
WIDE_ROWS = [
    (0.0, 0.0, 20.0, 0.0, 22.0),
    (90.0, 20.0, 30.0, 21.0, 31.0),
    (180.0, 40.0, 45.0, 41.0, 46.0),
    (270.0, 25.0, 35.0, 26.0, 36.0),
    (350.0, 5.0, 22.0, 6.0, 24.0),
]


class CountingStore(InMemoryPatternStore):
    """In-memory store that counts fetches per pattern id."""

    def __init__(self, patterns=None):
        super().__init__(patterns)
        self.fetches = Counter()

    def fetch(self, pattern_id):
        self.fetches[pattern_id] += 1
        return super().fetch(pattern_id)
