"""
Synthetic predictions for degraded mode (no usable classifier).
"""

import logging
import random
from typing import Sequence

from agrolens.config import MOCK_SEED
from agrolens.labels import REAL_LABELS, DiseaseLabel

logger = logging.getLogger(__name__)

# Synthetic confidence is drawn in whole percent steps from this range
MIN_CONFIDENCE_PCT = 80
MAX_CONFIDENCE_PCT = 99


class MockPredictor:
    """
    Picks a real label and a confidence in [0.80, 0.99].

    All randomness comes from ``rng``; pass a seeded random.Random to make
    the output reproducible.
    """

    def __init__(self, rng: random.Random | None = None, labels: Sequence[DiseaseLabel] = REAL_LABELS):
        self.rng = rng if rng is not None else random.Random(MOCK_SEED)
        self.labels = tuple(labels)
        if len(self.labels) < 2:
            raise ValueError("MockPredictor needs at least two labels")

    def synthesize(self) -> tuple:
        """Return (label index, confidence, probability distribution)."""
        index = self.rng.randrange(len(self.labels))
        confidence = self.rng.randint(MIN_CONFIDENCE_PCT, MAX_CONFIDENCE_PCT) / 100

        n = len(self.labels)
        rest = (1.0 - confidence) / (n - 1)
        probabilities = [rest] * n
        probabilities[index] = confidence

        logger.info("Mock prediction: %s (%.1f%%)", self.labels[index].value, confidence * 100)
        return index, confidence, probabilities
