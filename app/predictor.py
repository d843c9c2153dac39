"""
Prediction facade: image in, Diagnosis out.
Shares the process-wide ModelManager, which the API warms up at startup.
"""

import argparse
import json
import logging
import random
import sys

from agrolens.diagnosis import Diagnosis
from agrolens.errors import EmptyInferenceResult, ImageUnavailable
from agrolens.knowledge import describe, recommend
from agrolens.labels import ModelState
from agrolens.mock import MockPredictor
from agrolens.model_manager import ModelManager, get_model_manager
from agrolens.scoring import RankedResult, ScoreProcessor
from agrolens.severity import severity_of
from agrolens.utils import load_image

logger = logging.getLogger(__name__)


class Predictor:
    """Sequences model loading, scoring, severity and knowledge lookup."""

    def __init__(
        self,
        manager: ModelManager | None = None,
        processor: ScoreProcessor | None = None,
        mock: MockPredictor | None = None,
    ):
        self.manager = manager or get_model_manager()
        self.processor = processor or ScoreProcessor()
        self.mock = mock or MockPredictor()

    @property
    def loaded(self) -> bool:
        return self.manager.state.can_serve

    def warm_up(self) -> ModelState:
        self.manager.ensure_loaded()
        return self.manager.state

    def predict(self, source) -> Diagnosis:
        """
        Diagnose a rice leaf image given as a path or a byte buffer.

        Raises ImageUnavailable for unreadable input and InvalidScoreVector
        when a classifier returns malformed scores. Model and inference
        failures do not raise: the result is synthesized and marked degraded.
        """
        image = load_image(source)
        self.manager.ensure_loaded()

        ranked, source_kind = self._score(image)
        severity = severity_of(ranked.label, ranked.confidence)

        if source_kind == "mock":
            raw_prediction = f"mock_{ranked.top_index}"
        else:
            raw_prediction = str(ranked.top_index)

        diagnosis = Diagnosis(
            label=ranked.label,
            confidence=ranked.confidence,
            severity=severity,
            description=describe(ranked.label),
            recommendations=recommend(ranked.label),
            probabilities=ranked.as_dict(),
            source=source_kind,
            degraded=source_kind == "mock",
            raw_prediction=raw_prediction,
        )
        logger.info(
            "Predicted: %s (%.1f%%) severity=%s source=%s",
            diagnosis.label.value, diagnosis.confidence * 100,
            diagnosis.severity.value, diagnosis.source,
        )
        return diagnosis

    def _score(self, image) -> tuple:
        state, engine = self.manager.state, self.manager.engine
        if state is ModelState.MOCK_READY:
            return self._mock_result(), "mock"
        if state is ModelState.READY and engine is not None:
            try:
                scores = engine.classify(image)
                if scores is None or len(scores) == 0:
                    raise EmptyInferenceResult("Classifier returned no scores")
            except Exception as e:
                logger.warning("Inference failed, serving degraded mock prediction: %s", e, exc_info=True)
            else:
                return self.processor.process(scores), "model"
        else:
            # reload() or teardown() ran between ensure_loaded and scoring
            logger.warning("Classifier %s during prediction, serving degraded mock prediction", state.value)
        return self._mock_result(), "mock"

    def _mock_result(self) -> RankedResult:
        _, _, probabilities = self.mock.synthesize()
        return self.processor.process_distribution(probabilities, gate=False)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Diagnose a rice leaf photo")
    parser.add_argument("image", help="Path to a JPEG/PNG image")
    parser.add_argument("--model-path", default=None, help="Override MODEL_PATH")
    parser.add_argument("--seed", type=int, default=None, help="Seed for degraded-mode predictions")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    manager = ModelManager(args.model_path) if args.model_path else get_model_manager()
    mock = MockPredictor(random.Random(args.seed)) if args.seed is not None else None
    predictor = Predictor(manager=manager, mock=mock)

    try:
        diagnosis = predictor.predict(args.image)
        status = 0
    except ImageUnavailable as e:
        diagnosis = Diagnosis.failure(str(e))
        status = 1

    print(json.dumps(diagnosis.model_dump(mode="json"), indent=2))
    return status


if __name__ == "__main__":
    sys.exit(main())
