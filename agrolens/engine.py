"""
Inference engines: anything with ``classify(image) -> list[float]``.

TorchEngine wraps a loaded classifier with the inference transforms and
reports failures as InferenceFailed.
"""

import logging
from pathlib import Path
from typing import Protocol, Sequence

import torch
from PIL import Image

from agrolens.errors import EmptyInferenceResult, InferenceFailed, ModelAssetMissing, ModelLoadFailed
from agrolens.model import load_model
from agrolens.utils import get_val_transforms

logger = logging.getLogger(__name__)


class InferenceEngine(Protocol):
    def classify(self, image: Image.Image) -> Sequence[float]:
        ...


class TorchEngine:
    """Wraps a torch module for single-image inference."""

    def __init__(self, model, device: str = "cpu", transform=None):
        self.model = model
        self.device = torch.device(device)
        self.transform = transform or get_val_transforms()

    @classmethod
    def from_asset(cls, model_path: str, device: str | None = None) -> "TorchEngine":
        """Build an engine from a model artifact on disk."""
        path = Path(model_path)
        if not path.is_file():
            raise ModelAssetMissing(f"Model file not found at {path}")
        device = device or ("cuda" if torch.cuda.is_available() else "cpu")
        try:
            model = load_model(str(path), device=device)
        except Exception as e:
            raise ModelLoadFailed(f"Cannot build classifier from {path}: {e}") from e
        logger.info("Loaded classifier from %s (%d bytes) on %s", path, path.stat().st_size, device)
        return cls(model, device=device)

    @torch.no_grad()
    def classify(self, image: Image.Image) -> list:
        """Return one raw logit per disease class."""
        try:
            tensor = self.transform(image.convert("RGB")).unsqueeze(0).to(self.device)
            logits = self.model(tensor)  # shape: [1, num_classes]
        except Exception as e:
            raise InferenceFailed(f"Classifier raised: {e}") from e

        scores = logits.reshape(-1).tolist()
        if not scores:
            raise EmptyInferenceResult("Classifier returned no scores")
        return scores
