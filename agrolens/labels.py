"""
Disease labels, severity tiers and model lifecycle states.

The order of REAL_LABELS is the order of the classifier's output vector.
"""

from enum import Enum


class DiseaseLabel(str, Enum):
    BACTERIAL_LEAF_BLIGHT = "Bacterial Leaf Blight"
    BROWN_SPOT = "Brown Spot"
    LEAF_BLAST = "Leaf Blast"
    SHEATH_BLIGHT = "Sheath Blight"
    TUNGRO = "Tungro"

    # Produced by the pipeline, never by the classifier
    UNKNOWN = "Unknown"
    ERROR = "Error"

    @property
    def is_synthetic(self) -> bool:
        return self in (DiseaseLabel.UNKNOWN, DiseaseLabel.ERROR)

    @classmethod
    def parse(cls, name) -> "DiseaseLabel | None":
        """Case-insensitive lookup by display name, member name or legacy alias."""
        if isinstance(name, cls):
            return name
        if not isinstance(name, str):
            return None
        key = " ".join(name.replace("_", " ").split()).lower()
        return _LOOKUP.get(key)


REAL_LABELS = (
    DiseaseLabel.BACTERIAL_LEAF_BLIGHT,
    DiseaseLabel.BROWN_SPOT,
    DiseaseLabel.LEAF_BLAST,
    DiseaseLabel.SHEATH_BLIGHT,
    DiseaseLabel.TUNGRO,
)

# Display names used by earlier releases of the mobile app
_ALIASES = {
    "rice blast": DiseaseLabel.LEAF_BLAST,
    "blast": DiseaseLabel.LEAF_BLAST,
    "tungro virus": DiseaseLabel.TUNGRO,
    "unknown disease": DiseaseLabel.UNKNOWN,
}

_LOOKUP = {
    **{member.value.lower(): member for member in DiseaseLabel},
    **{member.name.replace("_", " ").lower(): member for member in DiseaseLabel},
    **_ALIASES,
}


class Severity(str, Enum):
    HIGH = "High"
    MODERATE = "Moderate"
    LOW = "Low"
    UNKNOWN = "Unknown"


class ModelState(str, Enum):
    UNLOADED = "unloaded"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"
    MOCK_READY = "mock_ready"

    @property
    def can_serve(self) -> bool:
        return self in (ModelState.READY, ModelState.MOCK_READY)
