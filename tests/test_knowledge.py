"""
Unit tests for the disease knowledge base and label parsing.
"""

import sys
from pathlib import Path
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from agrolens.knowledge import (
    GENERIC_DESCRIPTION,
    GENERIC_RECOMMENDATIONS,
    describe,
    recommend,
)
from agrolens.labels import REAL_LABELS, DiseaseLabel


class TestKnowledgeBase:
    @pytest.mark.parametrize("label", REAL_LABELS)
    def test_every_real_label_has_specific_advice(self, label):
        assert describe(label) and describe(label) != GENERIC_DESCRIPTION
        recs = recommend(label)
        assert recs and all(recs)
        assert tuple(recs) != GENERIC_RECOMMENDATIONS

    @pytest.mark.parametrize("name", [
        DiseaseLabel.UNKNOWN, DiseaseLabel.ERROR, "Powdery Mildew", "", None, 42,
    ])
    def test_fallback_never_empty(self, name):
        """Unrecognized input still yields a description and at least one recommendation."""
        assert describe(name) == GENERIC_DESCRIPTION
        assert recommend(name) == list(GENERIC_RECOMMENDATIONS)
        assert len(recommend(name)) >= 1

    def test_case_insensitive_lookup(self):
        assert describe("brown SPOT") == describe(DiseaseLabel.BROWN_SPOT)
        assert recommend("SHEATH_BLIGHT") == recommend(DiseaseLabel.SHEATH_BLIGHT)

    def test_legacy_aliases(self):
        """Names used by the old lookup table resolve to the enumeration."""
        assert describe("Rice Blast") == describe(DiseaseLabel.LEAF_BLAST)
        assert recommend("tungro virus") == recommend(DiseaseLabel.TUNGRO)

    def test_recommendations_are_copies(self):
        recs = recommend(DiseaseLabel.TUNGRO)
        recs.clear()
        assert recommend(DiseaseLabel.TUNGRO)

    def test_recommendation_order(self):
        assert recommend(DiseaseLabel.BACTERIAL_LEAF_BLIGHT)[0] == "Use certified disease-free seeds"


class TestDiseaseLabel:
    def test_real_labels_exclude_synthetic(self):
        assert len(REAL_LABELS) == 5
        assert not any(label.is_synthetic for label in REAL_LABELS)

    def test_parse(self):
        assert DiseaseLabel.parse("  bacterial   leaf blight ") is DiseaseLabel.BACTERIAL_LEAF_BLIGHT
        assert DiseaseLabel.parse("Unknown Disease") is DiseaseLabel.UNKNOWN
        assert DiseaseLabel.parse("nonsense") is None
