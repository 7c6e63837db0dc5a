"""
Simulated workload for demos.

Feeds a speedometer fake but plausible numbers: a bursty item counter,
a queue length that drifts up and down, or a job creeping toward its
total. Seeded, so two producers with the same seed behave the same.
"""

import math
import random

from speedo.metrics import Mode
from speedo.speedometer import Speedometer


class SimulatedProducer:

    def __init__(self, meter: Speedometer, seed: int = 42):
        self._meter = meter
        self._rng = random.Random(seed)
        self._tick = 0

    def step(self) -> int:
        """Advance one tick and push the new reading. Returns what was applied."""
        self._tick += 1
        t = self._tick
        mode = self._meter.mode

        if mode == Mode.ACCUMULATION:
            # Sinusoidal base throughput with occasional bursts
            base = 5 + 3 * math.sin(t * 0.1)
            burst = self._rng.randint(5, 15) if self._rng.random() > 0.9 else 0
            n = max(0, int(base + burst + self._rng.gauss(0, 1)))
            self._meter.add_value(n)
            return n

        if mode == Mode.VARIATION:
            # Queue depth: slow wave plus noise, never negative
            level = 100 + 60 * math.sin(t * 0.05) + self._rng.gauss(0, 5)
            level = max(0, int(level))
            self._meter.set_value(level)
            return level

        value, total = self._meter.snapshot()
        n = self._rng.randint(0, 2) if value < total else 0
        self._meter.add_value(n)
        return n

    @property
    def done(self) -> bool:
        if self._meter.mode != Mode.PROGRESS:
            return False
        value, total = self._meter.snapshot()
        return value >= total
