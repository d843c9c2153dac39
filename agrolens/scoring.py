"""
Turn raw classifier scores into a ranked, confidence-gated result.
"""

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from agrolens.config import CONFIDENCE_THRESHOLD, PROBABILITY_TOLERANCE
from agrolens.errors import InvalidScoreVector, LabelMismatch
from agrolens.labels import REAL_LABELS, DiseaseLabel


def softmax(scores: Sequence[float]) -> np.ndarray:
    """Numerically stable softmax over a 1-D score vector."""
    logits = np.asarray(scores, dtype=np.float64)
    shifted = logits - logits.max()
    exps = np.exp(shifted)
    return exps / exps.sum()


@dataclass(frozen=True)
class RankedResult:
    probabilities: tuple        # one per label, label index order
    ranking: tuple              # (label, probability), most likely first
    label: DiseaseLabel         # top label after the confidence gate
    confidence: float
    top_index: int              # index of the top label before gating

    @property
    def gated(self) -> bool:
        return self.label is DiseaseLabel.UNKNOWN

    def as_dict(self) -> dict:
        return {label.value: p for label, p in zip(REAL_LABELS, self.probabilities)}


class ScoreProcessor:
    """Softmax calibration, ranking and the confidence gate."""

    def __init__(self, labels: Sequence[DiseaseLabel] = REAL_LABELS, threshold: float = CONFIDENCE_THRESHOLD):
        self.labels = tuple(labels)
        self.threshold = threshold

    def process(self, scores: Sequence[float]) -> RankedResult:
        """Calibrate raw logits and rank the labels."""
        self._check(scores)
        return self.process_distribution(softmax(scores))

    def process_distribution(self, probabilities: Sequence[float], gate: bool = True) -> RankedResult:
        """Rank an already calibrated distribution; ``gate=False`` skips the confidence gate."""
        self._check(probabilities)
        probs = [float(p) for p in probabilities]
        if min(probs) < 0 or abs(sum(probs) - 1.0) > PROBABILITY_TOLERANCE:
            raise InvalidScoreVector("Probabilities must be non-negative and sum to 1")

        # Descending probability, ties by ascending label index
        order = sorted(range(len(probs)), key=lambda i: (-probs[i], i))
        ranking = tuple((self.labels[i], probs[i]) for i in order)

        top_index = order[0]
        label, confidence = self.labels[top_index], probs[top_index]
        if gate and confidence < self.threshold:
            label, confidence = DiseaseLabel.UNKNOWN, 0.0

        return RankedResult(
            probabilities=tuple(probs),
            ranking=ranking,
            label=label,
            confidence=confidence,
            top_index=top_index,
        )

    def _check(self, values: Sequence[float]) -> None:
        if values is None or len(values) == 0:
            raise InvalidScoreVector("Score vector is empty")
        if len(values) != len(self.labels):
            raise LabelMismatch(expected=len(self.labels), actual=len(values))
        if not np.all(np.isfinite(np.asarray(values, dtype=np.float64))):
            raise InvalidScoreVector("Score vector contains NaN or infinite values")
