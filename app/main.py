"""
FastAPI Inference Service for Rice Leaf Disease Diagnosis.

Endpoints:
  GET  /health   → Health check and model state
  GET  /labels   → Diseases the classifier knows
  POST /predict  → Diagnose an uploaded rice leaf image
  GET  /metrics  → Prometheus metrics

Usage:
    uvicorn app.main:app --host 0.0.0.0 --port 8000
    python -m app.main
"""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST

from agrolens.config import MODEL_VERSION
from agrolens.errors import ImageUnavailable, InvalidScoreVector
from agrolens.labels import REAL_LABELS
from agrolens.model_manager import shutdown_model_manager
from app.predictor import Predictor
from app.schemas import HealthResponse, LabelsResponse, PredictionResponse

# ── Structured JSON-like logging ─────────────────────────────────────────────
logging.basicConfig(
    level=logging.INFO,
    format='{"time": "%(asctime)s", "level": "%(levelname)s", "message": "%(message)s"}',
)
logger = logging.getLogger("agrolens-api")

# ── Prometheus Metrics ────────────────────────────────────────────────────────
REQUEST_COUNT = Counter(
    "agrolens_request_total",
    "Total number of requests",
    ["endpoint", "status"],
)
REQUEST_LATENCY = Histogram(
    "agrolens_request_latency_seconds",
    "Request latency in seconds",
    ["endpoint"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)
PREDICTION_LABELS = Counter(
    "agrolens_prediction_label_total",
    "Count of predicted labels",
    ["label", "severity"],
)
DEGRADED_PREDICTIONS = Counter(
    "agrolens_degraded_prediction_total",
    "Predictions served from the mock generator instead of the classifier",
)

ALLOWED_CONTENT_TYPES = ("image/jpeg", "image/png", "image/jpg")

# ── App lifespan (load model once) ───────────────────────────────────────────
predictor: Predictor | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    global predictor
    logger.info("Loading model...")
    predictor = Predictor()
    state = await run_in_threadpool(predictor.warm_up)
    logger.info(f"Model manager state: {state.value}")
    yield
    logger.info("Shutting down")
    shutdown_model_manager()
    predictor = None


app = FastAPI(
    title="Rice Leaf Disease Diagnosis API",
    description="Diagnose rice leaf diseases from a photo, with severity and remediation advice.",
    version="1.0.0",
    lifespan=lifespan,
)


# ── Endpoints ─────────────────────────────────────────────────────────────────

@app.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check():
    """Health check endpoint: service status and model state."""
    start = time.time()
    REQUEST_COUNT.labels(endpoint="/health", status="200").inc()
    REQUEST_LATENCY.labels(endpoint="/health").observe(time.time() - start)
    if predictor is None:
        return HealthResponse(status="starting", model_loaded=False, model_state="unloaded", degraded=False)
    return HealthResponse(
        status="ok",
        model_loaded=predictor.loaded,
        model_state=predictor.manager.state.value,
        degraded=predictor.manager.degraded,
    )


@app.get("/labels", response_model=LabelsResponse, tags=["System"])
async def labels():
    """Disease classes in classifier output order."""
    return LabelsResponse(labels=[label.value for label in REAL_LABELS])


@app.post("/predict", response_model=PredictionResponse, tags=["Inference"])
async def predict(file: UploadFile = File(..., description="Rice leaf image (jpg/png)")):
    """
    Accept an image upload and return a disease diagnosis.

    - **file**: Image file (JPEG or PNG recommended)
    """
    start = time.time()

    if predictor is None:
        REQUEST_COUNT.labels(endpoint="/predict", status="503").inc()
        raise HTTPException(status_code=503, detail="Model not loaded")

    # Validate file type
    if file.content_type not in ALLOWED_CONTENT_TYPES:
        REQUEST_COUNT.labels(endpoint="/predict", status="400").inc()
        raise HTTPException(status_code=400, detail="File must be an image (JPEG/PNG)")

    contents = await file.read()
    try:
        diagnosis = await run_in_threadpool(predictor.predict, contents)
    except ImageUnavailable as e:
        REQUEST_COUNT.labels(endpoint="/predict", status="400").inc()
        raise HTTPException(status_code=400, detail=f"Cannot read image: {e}")
    except InvalidScoreVector as e:
        REQUEST_COUNT.labels(endpoint="/predict", status="500").inc()
        logger.error(f"Classifier output rejected: {e}")
        raise HTTPException(status_code=500, detail="Diagnosis failed, please retry")

    latency = time.time() - start
    REQUEST_COUNT.labels(endpoint="/predict", status="200").inc()
    REQUEST_LATENCY.labels(endpoint="/predict").observe(latency)
    PREDICTION_LABELS.labels(label=diagnosis.label.value, severity=diagnosis.severity.value).inc()
    if diagnosis.degraded:
        DEGRADED_PREDICTIONS.inc()

    logger.info(
        f"predict | label={diagnosis.label.value} "
        f"confidence={diagnosis.confidence:.4f} "
        f"severity={diagnosis.severity.value} "
        f"source={diagnosis.source} "
        f"latency={latency:.3f}s "
        f"file={file.filename}"
    )

    return PredictionResponse(**diagnosis.model_dump(mode="json", exclude={"error"}), model_version=MODEL_VERSION)


@app.get("/metrics", tags=["System"], include_in_schema=False)
async def metrics():
    """Prometheus metrics endpoint."""
    data = generate_latest()
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=8000)
