import asyncio
import contextlib
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from app.core.config import settings
from app.core.exceptions import ServiceError
from app.core.housekeeping import housekeeping_loop
from app.core.metrics import PrometheusMiddleware, metrics_endpoint
from app.db.mongodb import connect_to_mongo, close_mongo_connection
from app.core.init_db import init_db
from app.api.v1.endpoints import invitations, mitigations, notifications, projects
from app.api import health

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="""
    RiskBoard API for tracking projects, their risks and mitigations.

    ## Features
    * **Project Membership**: Invite users to projects and manage members.
    * **Invitations**: Accept, reject or cancel invitations; pending invitations expire after a week.
    * **Notifications**: In-app notifications with read tracking and email delivery.
    * **Mitigations**: Plan, assign and complete mitigations.

    """,
    version="0.1.0",
    openapi_url=f"{settings.API_V1_STR}/openapi.json"
)

app.add_middleware(PrometheusMiddleware)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.on_event("startup")
async def startup_event():
    await connect_to_mongo()
    await init_db()
    app.state.housekeeping_task = asyncio.create_task(housekeeping_loop())

@app.on_event("shutdown")
async def shutdown_event():
    task = getattr(app.state, "housekeeping_task", None)
    if task is not None:
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
    await close_mongo_connection()

app.add_route("/metrics", metrics_endpoint, include_in_schema=False)
app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(projects.router, prefix=f"{settings.API_V1_STR}/projects", tags=["projects"])
app.include_router(invitations.router, prefix=f"{settings.API_V1_STR}/invitations", tags=["invitations"])
app.include_router(notifications.router, prefix=f"{settings.API_V1_STR}/notifications", tags=["notifications"])
app.include_router(mitigations.router, prefix=f"{settings.API_V1_STR}/mitigations", tags=["mitigations"])

@app.get("/")
async def root():
    return {"message": "Welcome to RiskBoard API"}
