"""
Pydantic schemas for request/response validation.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    model_loaded: bool
    model_state: str    # unloaded | loading | ready | failed | mock_ready
    degraded: bool      # True when predictions are synthetic
    version: str = "1.0.0"


class PredictionResponse(BaseModel):
    label: str                  # Disease name, "Unknown" or "Error"
    confidence: float           # Probability of predicted class (0.0 - 1.0)
    severity: str               # High | Moderate | Low | Unknown
    description: str
    recommendations: List[str]
    probabilities: Dict[str, float]
    source: str                 # "model" or "mock"
    degraded: bool
    raw_prediction: Optional[str] = None
    model_version: str


class LabelsResponse(BaseModel):
    labels: List[str]
