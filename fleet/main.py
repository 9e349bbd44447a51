import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError

from fleet.config import settings
from fleet.data.facade import DataAccessFacade
from fleet.utils.exceptions import AppException
from fleet.middleware.error_handler import (
    app_exception_handler,
    validation_exception_handler,
    integrity_error_handler,
    generic_exception_handler,
)

from fleet.api.v1 import auth
from fleet.api.v1 import vehicles
from fleet.api.v1 import drivers
from fleet.api.v1 import work_tickets
from fleet.api.v1 import fuel_records
from fleet.api.v1 import bulk_accounts
from fleet.api.v1 import maintenance
from fleet.api.v1 import components
from fleet.api.v1 import transfers
from fleet.api.v1 import reports
from fleet.api.v1 import dashboard
from fleet.api.v1 import system

logging.basicConfig(
    level=logging.DEBUG if settings.APP_DEBUG else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(facade: DataAccessFacade | None = None) -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        version="1.0.0",
        description="Government fleet management API: vehicles, drivers, work tickets, fuel, maintenance, components, transfers and reports",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    app.state.facade = facade or DataAccessFacade.from_settings(settings)

    # ─── CORS ─────────────────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ─── Exception Handlers ───────────────────────────────────────────────────
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    # ─── Routers ──────────────────────────────────────────────────────────────
    PREFIX = "/api/v1"
    app.include_router(auth.router,          prefix=PREFIX, tags=["Auth"])
    app.include_router(vehicles.router,      prefix=PREFIX, tags=["Vehicles"])
    app.include_router(drivers.router,       prefix=PREFIX, tags=["Drivers"])
    app.include_router(work_tickets.router,  prefix=PREFIX, tags=["Work Tickets"])
    app.include_router(fuel_records.router,  prefix=PREFIX, tags=["Fuel Records"])
    app.include_router(bulk_accounts.router, prefix=PREFIX, tags=["Bulk Accounts"])
    app.include_router(maintenance.router,   prefix=PREFIX, tags=["Maintenance"])
    app.include_router(components.router,    prefix=PREFIX, tags=["Components"])
    app.include_router(transfers.router,     prefix=PREFIX, tags=["Transfers"])
    app.include_router(reports.router,       prefix=PREFIX, tags=["Reports"])
    app.include_router(dashboard.router,     prefix=PREFIX, tags=["Dashboard"])
    app.include_router(system.router,        prefix=PREFIX, tags=["System"])

    # ─── Startup ──────────────────────────────────────────────────────────────
    @app.on_event("startup")
    def on_startup():
        # Probe runs in the background; requests wait on the latch, bounded by INIT_TIMEOUT_SECONDS
        app.state.facade.start_initialization()

    # ─── Health ───────────────────────────────────────────────────────────────
    @app.get("/health", tags=["Health"])
    def health():
        f = app.state.facade
        ready = f.wait_for_initialization(timeout=0)
        return {
            "status":      "ok",
            "app":         settings.APP_NAME,
            "version":     "1.0.0",
            "initialized": ready,
            "demoMode":    f.is_using_sample_data(),
        }

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("fleet.main:app", host=settings.APP_HOST, port=settings.APP_PORT,
                reload=settings.is_development)
