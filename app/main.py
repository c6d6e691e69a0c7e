from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from app.core.config import Settings, settings as default_settings
from app.core.logger import setup_logging, logger
from app.core.security import generate_admin_token, build_admin_url
from app.api import bookings, admin
from app.services.booking_service import BookingService, BookingNotFoundError
from app.services.record_store import JsonFileRecordStore, StorageError
from contextlib import asynccontextmanager
from datetime import datetime


def create_app(settings: Settings = default_settings) -> FastAPI:
    setup_logging(settings.LOG_LEVEL, settings.LOG_DIR)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        logger.info(f"🚀 Starting {settings.PROJECT_NAME}")
        store = JsonFileRecordStore(settings.BOOKINGS_FILE, strict=settings.STRICT_STORAGE)
        store.ensure_ready()

        app.state.booking_service = BookingService(store)
        app.state.admin_token = generate_admin_token()

        logger.info(f"🔑 Admin token: {app.state.admin_token}")
        logger.info(f"🔗 Admin panel: {build_admin_url(settings.PUBLIC_BASE_URL, settings.ADMIN_PATH, app.state.admin_token)}")
        yield
        # Shutdown
        logger.info("🛑 Shutting down backend")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="0.1.0",
        lifespan=lifespan
    )

    @app.exception_handler(BookingNotFoundError)
    async def booking_not_found_handler(request: Request, exc: BookingNotFoundError):
        logger.info(f"🔍 {request.method} {request.url.path}: booking {exc.booking_id} not found")
        return JSONResponse(status_code=404, content={"success": False, "message": "Booking not found"})

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error(f"💾 STORAGE ERROR on {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"success": False, "message": "Could not save booking data"})

    # Global Exception Handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.opt(exception=exc).error(f"🔥 UNHANDLED ERROR: {str(exc)}")
        return JSONResponse(
            status_code=500,
            content={"success": False, "message": "Internal Server Error"}
        )

    # Include routers
    app.include_router(bookings.router, prefix=settings.API_PREFIX, tags=["Bookings"])
    app.include_router(admin.router, prefix=f"{settings.API_PREFIX}/admin", tags=["Admin"])

    @app.get("/")
    async def health_check():
        return {'status': 'active', 'time': datetime.now().isoformat()}

    @app.get("/health")
    async def health_check_std():
        return {"status": "ok", "environment": settings.ENVIRONMENT, "timestamp": datetime.now().isoformat()}

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host=default_settings.HOST, port=default_settings.PORT)
