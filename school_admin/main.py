import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from school_admin.api.v1.attendance.router import router as attendance_router
from school_admin.api.v1.dashboard.router import router as dashboard_router
from school_admin.api.v1.discounts.router import router as discounts_router
from school_admin.api.v1.fees.router import router as fees_router
from school_admin.api.v1.reports.router import router as reports_router
from school_admin.api.v1.students.router import router as students_router
from school_admin.core.config import settings
from school_admin.core.exceptions import ServiceError, ValidationError
from school_admin.core.logger import setup_logging
from school_admin.core.schemas import ErrorResponse
from school_admin.db.executor import QueryExecutor
from school_admin.db.session import ConnectionManager

logger = logging.getLogger(__name__)

ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Body/query validation failures become 400s naming the offending fields."""
    errors = exc.errors()
    fields: List[str] = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ())]
        name = ".".join(loc[1:]) or ".".join(loc)
        if name not in fields:
            fields.append(name)
    missing = bool(errors) and all(err.get("type") == "missing" for err in errors)
    error = ValidationError(
        "Required fields are missing" if missing else "Invalid input",
        field=", ".join(fields) or None,
        details="; ".join(str(err.get("msg")) for err in errors) or None,
    )
    return JSONResponse(status_code=error.status_code, content=error.to_payload())


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


def create_app(manager: Optional[ConnectionManager] = None) -> FastAPI:
    setup_logging(settings.log_level)
    manager = manager or ConnectionManager.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await manager.start()
        yield
        await manager.stop()

    app = FastAPI(title="School Admin Backend", lifespan=lifespan)
    app.state.connection_manager = manager
    app.state.executor = QueryExecutor(manager)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

    # Routers
    app.include_router(students_router, responses=ERROR_RESPONSES)
    app.include_router(reports_router, responses=ERROR_RESPONSES)
    app.include_router(fees_router, responses=ERROR_RESPONSES)
    app.include_router(attendance_router, responses=ERROR_RESPONSES)
    app.include_router(discounts_router, responses=ERROR_RESPONSES)
    app.include_router(dashboard_router, responses=ERROR_RESPONSES)

    @app.get("/api/v1/health", tags=["health"])
    async def health(request: Request) -> dict:
        store = request.app.state.connection_manager
        return {"status": "ok", "store": "available" if store.is_available else "unavailable"}

    return app


app = create_app()
