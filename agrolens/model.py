"""
Model definition for rice leaf disease classification.
Uses ShuffleNetV2 as a mobile-friendly backbone with a multi-class head.
"""

from pathlib import Path

import torch
import torch.nn as nn
from torchvision import models

from agrolens.labels import REAL_LABELS

NUM_CLASSES = len(REAL_LABELS)

# Suffixes of serialized scripted modules; anything else is a state_dict/checkpoint
LITE_SUFFIXES = (".ptl",)
SCRIPTED_SUFFIXES = (".ts", ".torchscript")


class RiceLeafModel(nn.Module):
    """ShuffleNetV2 x1.0 fine-tuned for rice leaf disease classification."""

    def __init__(self, num_classes: int = NUM_CLASSES, pretrained: bool = True):
        super().__init__()
        weights = models.ShuffleNet_V2_X1_0_Weights.DEFAULT if pretrained else None
        self.backbone = models.shufflenet_v2_x1_0(weights=weights)

        in_features = self.backbone.fc.in_features
        self.backbone.fc = nn.Sequential(
            nn.Dropout(p=0.2),
            nn.Linear(in_features, num_classes),  # One logit per disease
        )
        self.num_classes = num_classes

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        return self.backbone(x)  # Returns raw logits


def get_model(num_classes: int = NUM_CLASSES, pretrained: bool = True) -> RiceLeafModel:
    """Factory function to create and return the model."""
    return RiceLeafModel(num_classes=num_classes, pretrained=pretrained)


def load_model(checkpoint_path: str, device: str = "cpu") -> nn.Module:
    """
    Load a classifier from disk.

    Mobile exports (.ptl) go through the lite interpreter, TorchScript
    exports through torch.jit; everything else is treated as a state_dict
    or a training checkpoint for RiceLeafModel.
    """
    path = Path(checkpoint_path)
    suffix = path.suffix.lower()

    if suffix in LITE_SUFFIXES:
        from torch.jit.mobile import _load_for_lite_interpreter
        return _load_for_lite_interpreter(str(path), map_location=device)

    if suffix in SCRIPTED_SUFFIXES:
        model = torch.jit.load(str(path), map_location=device)
        model.eval()
        return model

    model = RiceLeafModel(pretrained=False)
    state = torch.load(str(path), map_location=device)
    # Support both raw state_dict and checkpoint dict
    if isinstance(state, dict) and "model_state_dict" in state:
        model.load_state_dict(state["model_state_dict"])
    else:
        model.load_state_dict(state)
    model.to(device)
    model.eval()
    return model
