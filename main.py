# type: ignore
# pyright: reportGeneralTypeIssues=false
"""
Membership Service
==================
Gym membership administration: member records, renewals, expiry tracking,
aggregate statistics, and the admin-managed staff directory.

Status lifecycle (persisted status is corrected lazily, on every write):
    active ─► expired   (expiry date passed)
    any    ─► active    (renewal)

Port: 8005
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from membership_service.controllers import member_controller, system_controller, user_controller
from membership_service.core.config import settings
from membership_service.core.database import engine
from membership_service.core.dependencies import get_lifecycle_service, get_seed_service
from membership_service.core.logging import get_logger
from membership_service.metrics.prometheus import MEMBERS_TOTAL
from membership_service.middleware import MetricsMiddleware, RequestIDMiddleware
from membership_service.models.tables import metadata

logger = get_logger(settings.SERVICE_NAME)


# ── Lifespan ──────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(application: FastAPI):
    metadata.create_all(engine)
    if settings.SEED_DEMO_DATA:
        get_seed_service().seed_demo_data()
    try:
        MEMBERS_TOTAL.set(get_lifecycle_service().count_members())
        logger.info("Prometheus gauges loaded from DB")
    except Exception:
        logger.warning("Could not seed gauges, DB may not be ready yet")
    yield
    engine.dispose()
    logger.info("Shutting down, connection pool disposed")


# ── FastAPI App ───────────────────────────────────────────────────────────
app = FastAPI(
    title="Membership Service",
    description="Gym membership lifecycle: records, renewals, expiry tracking and statistics.",
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestIDMiddleware)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"detail": "Validation failed", "errors": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception")
    return JSONResponse(status_code=500, content={"error": "internal_server_error", "detail": str(exc)})


app.include_router(system_controller.router)
app.include_router(member_controller.router)
app.include_router(user_controller.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.SERVICE_PORT, log_level="info")
