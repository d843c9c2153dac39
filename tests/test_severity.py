"""
Unit tests for severity tiers.
"""

import sys
from pathlib import Path
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from agrolens.labels import DiseaseLabel, Severity
from agrolens.severity import severity_of


class TestSeverityBoundaries:
    @pytest.mark.parametrize("confidence, expected", [
        (1.0, Severity.HIGH),
        (0.80, Severity.HIGH),
        (0.7999, Severity.MODERATE),
        (0.60, Severity.MODERATE),
        (0.5999, Severity.LOW),
        (0.0, Severity.LOW),
    ])
    def test_tiers(self, confidence, expected):
        assert severity_of(DiseaseLabel.BROWN_SPOT, confidence) is expected

    @pytest.mark.parametrize("confidence", [0.0, 0.5, 0.8, 1.0])
    def test_unknown_ignores_confidence(self, confidence):
        assert severity_of(DiseaseLabel.UNKNOWN, confidence) is Severity.UNKNOWN

    def test_error_label_is_unknown_severity(self):
        assert severity_of(DiseaseLabel.ERROR, 0.0) is Severity.UNKNOWN

    def test_custom_thresholds(self):
        assert severity_of(DiseaseLabel.TUNGRO, 0.85, high=0.9, moderate=0.5) is Severity.MODERATE
