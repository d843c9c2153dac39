"""
Classifier lifecycle: unloaded → loading → ready, or failed → mock_ready.

One ModelManager is shared per process (see get_model_manager). Loading is
single-flight: concurrent first calls wait for the attempt already in
progress and all observe the same terminal state. Once the manager falls
back to mock mode it stays there until reload() is called explicitly.
"""

import logging
import threading
from typing import Callable

from agrolens.config import MODEL_PATH
from agrolens.engine import InferenceEngine, TorchEngine
from agrolens.errors import ModelAssetMissing, ModelLoadFailed
from agrolens.labels import ModelState

logger = logging.getLogger(__name__)

EngineFactory = Callable[[str], InferenceEngine]


class ModelManager:
    """Owns the classifier and its load state."""

    def __init__(self, model_path: str = MODEL_PATH, engine_factory: EngineFactory | None = None):
        self.model_path = model_path
        self._engine_factory = engine_factory or TorchEngine.from_asset
        self._lock = threading.Lock()
        self._state = ModelState.UNLOADED
        self._engine: InferenceEngine | None = None
        self.load_attempts = 0
        self.last_error: Exception | None = None

    @property
    def state(self) -> ModelState:
        return self._state

    @property
    def engine(self) -> InferenceEngine | None:
        return self._engine

    @property
    def degraded(self) -> bool:
        return self._state is ModelState.MOCK_READY

    def ensure_loaded(self) -> bool:
        """
        Make the manager ready to serve predictions.

        Idempotent once READY or MOCK_READY. Always returns True: a missing
        or broken model asset switches the manager to mock mode instead of
        failing, so predictions stay available without a classifier.
        """
        if self._state.can_serve:
            return True
        with self._lock:
            # Another caller may have finished loading while we waited
            if not self._state.can_serve:
                self._load()
        return True

    def reload(self) -> bool:
        """Drop the current engine and retry a real load."""
        with self._lock:
            logger.info("Reloading classifier from %s", self.model_path)
            self._engine = None
            self._state = ModelState.UNLOADED
            self._load()
        return True

    def teardown(self) -> None:
        """Release the engine and return to UNLOADED."""
        with self._lock:
            self._engine = None
            self._state = ModelState.UNLOADED
            logger.info("Classifier released")

    def _load(self) -> None:
        # Caller holds self._lock
        self._state = ModelState.LOADING
        self.load_attempts += 1
        logger.info("Loading classifier from %s", self.model_path)
        try:
            engine = self._engine_factory(self.model_path)
        except (ModelAssetMissing, ModelLoadFailed) as e:
            self._fall_back(e)
            return
        except Exception as e:
            self._fall_back(ModelLoadFailed(str(e)))
            return
        self._engine = engine
        self.last_error = None
        self._state = ModelState.READY
        logger.info("Classifier ready")

    def _fall_back(self, error: Exception) -> None:
        self._state = ModelState.FAILED
        self.last_error = error
        logger.warning(
            "Classifier unavailable (%s: %s); serving mock predictions",
            type(error).__name__, error,
        )
        self._engine = None
        self._state = ModelState.MOCK_READY


# ── Process-wide instance ─────────────────────────────────────────────────────

_manager: ModelManager | None = None
_manager_lock = threading.Lock()


def get_model_manager() -> ModelManager:
    """Return the shared ModelManager, creating it on first use."""
    global _manager
    with _manager_lock:
        if _manager is None:
            _manager = ModelManager()
        return _manager


def shutdown_model_manager() -> None:
    """Tear down and forget the shared ModelManager."""
    global _manager
    with _manager_lock:
        if _manager is not None:
            _manager.teardown()
        _manager = None
