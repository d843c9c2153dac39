"""
The pipeline's output record.
"""

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from agrolens.knowledge import describe, recommend
from agrolens.labels import DiseaseLabel, Severity


class Diagnosis(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: DiseaseLabel
    confidence: float = Field(ge=0.0, le=1.0)
    severity: Severity
    description: str = Field(min_length=1)
    recommendations: List[str] = Field(min_length=1)
    probabilities: Dict[str, float] = Field(default_factory=dict)
    source: Literal["model", "mock", "none"] = "model"
    degraded: bool = False              # True for any synthetic (mock) result
    raw_prediction: Optional[str] = None  # "<index>" or "mock_<index>"
    error: Optional[str] = None

    @classmethod
    def failure(cls, message: str) -> "Diagnosis":
        """A renderable result for a request that could not be diagnosed."""
        return cls(
            label=DiseaseLabel.ERROR,
            confidence=0.0,
            severity=Severity.UNKNOWN,
            description=describe(DiseaseLabel.ERROR),
            recommendations=recommend(DiseaseLabel.ERROR),
            source="none",
            error=message,
        )
