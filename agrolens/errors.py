"""
Exception taxonomy for the diagnosis pipeline.

Only ImageUnavailable and InvalidScoreVector (and its subclasses) are meant
to reach the user. Model and inference failures are recovered inside the
pipeline into a degraded diagnosis.
"""


class AgrolensError(Exception):
    """Base class for all pipeline errors."""


class ImageUnavailable(AgrolensError):
    """The supplied image could not be read or decoded."""


class ModelAssetMissing(AgrolensError):
    """The model artifact is absent or unreadable."""


class ModelLoadFailed(AgrolensError):
    """The artifact exists but the engine could not be built from it."""


class InferenceFailed(AgrolensError):
    """The classifier raised while scoring an image."""


class EmptyInferenceResult(InferenceFailed):
    """The classifier returned no scores."""


class InvalidScoreVector(AgrolensError, ValueError):
    """A score vector violates the processing contract (empty or non-finite)."""


class LabelMismatch(InvalidScoreVector):
    """Score vector length does not match the configured label set."""

    def __init__(self, expected: int, actual: int):
        super().__init__(
            f"Classifier produced {actual} scores but {expected} labels are configured"
        )
        self.expected = expected
        self.actual = actual
