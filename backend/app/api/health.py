from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from app.db.mongodb import db

router = APIRouter()


async def _database_status() -> str:
    if not db.client:
        return "client_not_initialized"
    try:
        await db.client.admin.command("ping")
    except Exception as e:
        return f"error: {e}"
    return "connected"


@router.get("/live", summary="Liveness Probe")
async def liveness():
    """The process is up and serving requests."""
    return {"status": "alive"}


@router.get("/ready", summary="Readiness Probe")
async def readiness():
    """
    Ready once MongoDB answers a ping. Every endpoint needs the database,
    so there is no degraded mode.
    """
    database = await _database_status()
    components = {"database": database}
    if database == "connected":
        return {"status": "ready", "components": components}

    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not_ready", "components": components},
    )
