import os
import time

import psutil  # type: ignore[import-untyped]
from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """
    Health check endpoint that reports system resources and service status.

    Returns "initializing" until the classifier has been created, and
    "degraded" when it started without its profile store.
    """
    cpu_percent = psutil.cpu_percent()
    memory = psutil.virtual_memory()

    classifier = getattr(request.app.state, "classifier", None)
    if classifier is None:
        classifier_status = "initializing"
        profiles_loaded = 0
    else:
        stats = classifier.get_stats()
        profiles_loaded = stats["profiles_loaded"]
        classifier_status = "degraded" if stats["load_error"] else "healthy"

    translation_status = (
        "healthy"
        if getattr(request.app.state, "translation_service", None) is not None
        else "initializing"
    )

    overall_status = translation_status
    if classifier_status != "healthy":
        overall_status = classifier_status

    return {
        "status": overall_status,
        "timestamp": int(time.time()),
        "build_id": os.getenv("BUILD_ID", "unknown"),
        "system": {
            "cpu_percent": cpu_percent,
            "memory_percent": memory.percent,
        },
        "services": {
            "classifier": classifier_status,
            "translation": translation_status,
        },
        "profiles_loaded": profiles_loaded,
    }


@router.get("/health/ready")
async def readiness_check(request: Request):
    """
    Readiness probe that checks if the service is ready to handle requests.
    """
    ready = getattr(request.app.state, "translation_service", None) is not None
    return {"status": "ready" if ready else "initializing"}


@router.get("/health/live")
async def liveness_check():
    """
    Liveness probe that checks if the service is running.
    """
    return {"status": "alive"}
