"""
Runtime configuration, read once from the environment.
"""

import os

MODEL_PATH = os.getenv("MODEL_PATH", "models/ShuffleNetV2_for_mobile_finalV2.ptl")
MODEL_VERSION = os.getenv("MODEL_VERSION", "shufflenetv2_mobile_v2")

INPUT_SIZE = int(os.getenv("INPUT_SIZE", "224"))

# ImageNet normalization (same as training)
IMAGENET_MEAN = [0.485, 0.456, 0.406]
IMAGENET_STD = [0.229, 0.224, 0.225]

CONFIDENCE_THRESHOLD = float(os.getenv("CONFIDENCE_THRESHOLD", "0.70"))
HIGH_SEVERITY_THRESHOLD = float(os.getenv("HIGH_SEVERITY_THRESHOLD", "0.80"))
MODERATE_SEVERITY_THRESHOLD = float(os.getenv("MODERATE_SEVERITY_THRESHOLD", "0.60"))

# Unset means the degraded-mode generator is seeded from the OS
_mock_seed = os.getenv("MOCK_SEED")
MOCK_SEED = int(_mock_seed) if _mock_seed else None

# Tolerance used when checking that a distribution sums to 1
PROBABILITY_TOLERANCE = 1e-6
