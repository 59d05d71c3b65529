from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """
    Health check endpoint for monitoring API status and component readiness.

    Returns status of API, database, and media storage along with deployment mode.
    """
    settings = request.app.state.settings

    health_status = {
        "status": "ok",
        "deployment_mode": settings.deployment_mode,
        "components": {
            "api": "ready",
            "database": "ready",
            "storage": "ready"
        },
        "ready": False
    }

    if not request.app.state.store.ping():
        health_status["components"]["database"] = "unavailable"
        health_status["status"] = "degraded"

    if not request.app.state.blob_store.ping():
        health_status["components"]["storage"] = "unavailable"
        health_status["status"] = "degraded"

    health_status["ready"] = all(
        state == "ready" for state in health_status["components"].values()
    )

    return health_status
