"""
Post-deployment batch simulation.
Sends N synthetic leaf images to the running API, collects diagnoses and
logs a report on label mix, severity mix, degraded share and latency.

Usage:
    python monitoring/simulate_requests.py --n 50 --url http://localhost:8000
"""

import argparse
import time
import random
import io
import json
from collections import Counter
from datetime import datetime, timezone
import requests
import numpy as np
from PIL import Image


# Leaf-like base tones: healthy green, yellowed, brown-spotted
LEAF_PROFILES = {
    "green":  (60, 140, 50),
    "yellow": (190, 180, 60),
    "brown":  (120, 80, 40),
}


def make_dummy_leaf(color: tuple, seed: int) -> bytes:
    """Generate a synthetic 224×224 JPEG with a base tone and random lesion blotches."""
    rng = np.random.default_rng(seed)
    arr = np.full((224, 224, 3), color, dtype=np.uint8)
    for _ in range(rng.integers(0, 12)):
        y, x = rng.integers(0, 214, size=2)
        arr[y:y + 10, x:x + 10] = (90, 60, 30)
    img = Image.fromarray(arr, mode="RGB")
    buf = io.BytesIO()
    img.save(buf, format="JPEG")
    return buf.getvalue()


def run_simulation(base_url: str, n: int, report_path: str = "monitoring/performance_report.json"):
    predict_url = f"{base_url}/predict"
    health_url  = f"{base_url}/health"

    # Check health first
    resp = requests.get(health_url, timeout=5)
    resp.raise_for_status()
    print(f"[Health] {resp.json()}\n")

    results = []   # (label, severity, confidence, degraded, latency)
    errors  = 0

    for i in range(n):
        tone      = random.choice(list(LEAF_PROFILES))
        img_bytes = make_dummy_leaf(LEAF_PROFILES[tone], seed=i)

        start = time.perf_counter()
        try:
            r = requests.post(
                predict_url,
                files={"file": ("leaf.jpg", img_bytes, "image/jpeg")},
                timeout=10,
            )
        except requests.RequestException as e:
            errors += 1
            print(f"  [{i+1:02d}/{n}] EXCEPTION: {e}")
            continue
        latency = time.perf_counter() - start

        if r.status_code != 200:
            errors += 1
            print(f"  [{i+1:02d}/{n}] ERROR: HTTP {r.status_code}")
            continue

        data = r.json()
        results.append((data["label"], data["severity"], data["confidence"], data["degraded"], latency))
        flag = "mock" if data["degraded"] else "model"
        print(
            f"  [{i+1:02d}/{n}] tone={tone:<6}  label={data['label']:<22}  "
            f"conf={data['confidence']:.4f}  sev={data['severity']:<8}  "
            f"latency={latency*1000:.1f}ms  {flag}"
        )

    # ── Summary ────────────────────────────────────────────────────────────────
    generated = datetime.now(timezone.utc)
    print("\n" + "=" * 55)
    print("  Post-Deployment Diagnosis Report")
    print(f"  Generated: {generated.strftime('%Y-%m-%d %H:%M:%S UTC')}")
    print("=" * 55)

    if not results:
        print("  No successful predictions recorded.")
        return None

    total      = len(results)
    labels     = Counter(label for label, _, __, ___, ____ in results)
    severities = Counter(sev for _, sev, __, ___, ____ in results)
    degraded   = sum(1 for *_, d, __ in results if d)
    latencies  = sorted(l for *_, l in results)
    avg_conf   = sum(c for _, __, c, ___, ____ in results) / total
    avg_lat    = sum(latencies) / total
    p95_lat    = latencies[min(total - 1, int(0.95 * total))]

    print(f"  Total requests     : {n}")
    print(f"  Successful         : {total}  (errors: {errors})")
    print(f"  Degraded (mock)    : {degraded}/{total}")
    print(f"  Labels             : {dict(labels)}")
    print(f"  Severities         : {dict(severities)}")
    print(f"  Avg confidence     : {avg_conf:.4f}")
    print(f"  Avg latency        : {avg_lat*1000:.1f} ms")
    print(f"  P95 latency        : {p95_lat*1000:.1f} ms")
    print("=" * 55)

    # ── Save JSON report ───────────────────────────────────────────────────────
    report = {
        "timestamp": generated.isoformat(),
        "total_requests": n,
        "successful": total,
        "errors": errors,
        "degraded_share": round(degraded / total, 4),
        "labels": dict(labels),
        "severities": dict(severities),
        "avg_confidence": round(avg_conf, 4),
        "avg_latency_ms": round(avg_lat * 1000, 2),
        "p95_latency_ms": round(p95_lat * 1000, 2),
    }
    with open(report_path, "w") as f:
        json.dump(report, f, indent=2)
    print(f"\n  Report saved → {report_path}")
    return report


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Simulate batch diagnosis requests")
    parser.add_argument("--n",   type=int, default=50, help="Number of requests")
    parser.add_argument("--url", type=str, default="http://localhost:8000")
    args = parser.parse_args()
    run_simulation(args.url, args.n)
