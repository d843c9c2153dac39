"""
Severity tier for a diagnosed disease.
"""

from agrolens.config import HIGH_SEVERITY_THRESHOLD, MODERATE_SEVERITY_THRESHOLD
from agrolens.labels import DiseaseLabel, Severity


def severity_of(
    label: DiseaseLabel,
    confidence: float,
    high: float = HIGH_SEVERITY_THRESHOLD,
    moderate: float = MODERATE_SEVERITY_THRESHOLD,
) -> Severity:
    """
    Map a label and its confidence to a severity tier.

    Lower bounds are inclusive: 0.80 is High, 0.60 is Moderate. Unknown and
    Error labels have Unknown severity whatever the confidence.
    """
    if label.is_synthetic:
        return Severity.UNKNOWN
    if confidence >= high:
        return Severity.HIGH
    if confidence >= moderate:
        return Severity.MODERATE
    return Severity.LOW
