"""
Unit tests for the classifier lifecycle and the shared manager.
Engines are faked; no model file is needed.
"""

import sys
import threading
import time
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeout
from pathlib import Path
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from agrolens.errors import ModelAssetMissing, ModelLoadFailed
from agrolens.labels import ModelState
from agrolens import model_manager
from agrolens.model_manager import ModelManager, get_model_manager, shutdown_model_manager


class FakeEngine:
    def classify(self, image):
        return [5.0, 0.1, 0.1, 0.1, 0.1]


class CountingFactory:
    """Engine factory that records calls and can be slowed down or made to fail."""

    def __init__(self, delay=0.0, error=None):
        self.delay = delay
        self.error = error
        self.calls = 0
        self._lock = threading.Lock()

    def __call__(self, path):
        with self._lock:
            self.calls += 1
        time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return FakeEngine()


class TestEnsureLoaded:
    def test_starts_unloaded(self):
        manager = ModelManager("model.ptl", engine_factory=CountingFactory())
        assert manager.state is ModelState.UNLOADED
        assert manager.engine is None

    def test_successful_load(self):
        factory = CountingFactory()
        manager = ModelManager("model.ptl", engine_factory=factory)
        assert manager.ensure_loaded() is True
        assert manager.state is ModelState.READY
        assert isinstance(manager.engine, FakeEngine)
        assert not manager.degraded

    def test_idempotent(self):
        factory = CountingFactory()
        manager = ModelManager("model.ptl", engine_factory=factory)
        for _ in range(5):
            assert manager.ensure_loaded()
        assert factory.calls == 1

    def test_missing_asset_falls_back_to_mock(self, tmp_path):
        """The default torch factory on a missing file ends in MOCK_READY."""
        manager = ModelManager(str(tmp_path / "absent.ptl"))
        assert manager.ensure_loaded() is True
        assert manager.state is ModelState.MOCK_READY
        assert manager.degraded
        assert isinstance(manager.last_error, ModelAssetMissing)

    def test_construction_failure_falls_back_to_mock(self):
        factory = CountingFactory(error=ModelLoadFailed("bad weights"))
        manager = ModelManager("model.ptl", engine_factory=factory)
        assert manager.ensure_loaded() is True
        assert manager.state is ModelState.MOCK_READY
        assert manager.engine is None

    def test_unexpected_factory_error_is_absorbed(self):
        factory = CountingFactory(error=RuntimeError("driver crashed"))
        manager = ModelManager("model.ptl", engine_factory=factory)
        assert manager.ensure_loaded() is True
        assert manager.state is ModelState.MOCK_READY
        assert isinstance(manager.last_error, ModelLoadFailed)

    def test_mock_mode_is_permanent(self):
        """Once degraded, further ensure_loaded calls do not retry the real load."""
        factory = CountingFactory(error=ModelAssetMissing("gone"))
        manager = ModelManager("model.ptl", engine_factory=factory)
        manager.ensure_loaded()
        manager.ensure_loaded()
        assert factory.calls == 1
        assert manager.state is ModelState.MOCK_READY


class TestConcurrentLoad:
    @pytest.mark.parametrize("error", [None, ModelAssetMissing("gone")])
    def test_single_flight(self, error):
        """N concurrent first calls trigger one load and agree on the terminal state."""
        n = 16
        factory = CountingFactory(delay=0.2, error=error)
        manager = ModelManager("model.ptl", engine_factory=factory)
        barrier = threading.Barrier(n)

        def call():
            barrier.wait()
            ok = manager.ensure_loaded()
            return ok, manager.state

        with ThreadPoolExecutor(max_workers=n) as pool:
            results = list(pool.map(lambda _: call(), range(n)))

        expected = ModelState.READY if error is None else ModelState.MOCK_READY
        assert factory.calls == 1
        assert manager.load_attempts == 1
        assert all(ok for ok, _ in results)
        assert {state for _, state in results} == {expected}

    def test_abandoned_waiter_does_not_corrupt_state(self):
        """A caller that gives up waiting leaves the load to finish normally."""
        factory = CountingFactory(delay=0.3)
        manager = ModelManager("model.ptl", engine_factory=factory)
        with ThreadPoolExecutor(max_workers=1) as pool:
            future = pool.submit(manager.ensure_loaded)
            with pytest.raises(FutureTimeout):
                future.result(timeout=0.01)
            assert future.result(timeout=5) is True
        assert manager.state is ModelState.READY
        assert factory.calls == 1


class TestReloadAndTeardown:
    def test_reload_retries_real_load(self):
        factory = CountingFactory(error=ModelAssetMissing("gone"))
        manager = ModelManager("model.ptl", engine_factory=factory)
        manager.ensure_loaded()
        assert manager.state is ModelState.MOCK_READY

        factory.error = None
        assert manager.reload() is True
        assert manager.state is ModelState.READY
        assert factory.calls == 2
        assert manager.last_error is None

    def test_teardown_returns_to_unloaded(self):
        factory = CountingFactory()
        manager = ModelManager("model.ptl", engine_factory=factory)
        manager.ensure_loaded()
        manager.teardown()
        assert manager.state is ModelState.UNLOADED
        assert manager.engine is None
        manager.ensure_loaded()
        assert factory.calls == 2


class TestSharedManager:
    def test_same_instance_until_shutdown(self):
        shutdown_model_manager()
        first = get_model_manager()
        assert get_model_manager() is first
        shutdown_model_manager()
        assert model_manager._manager is None
        assert get_model_manager() is not first
        shutdown_model_manager()
