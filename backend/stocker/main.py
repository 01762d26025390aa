import time

from fastapi import FastAPI, Request, status, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from starlette.exceptions import HTTPException as StarletteHTTPException

from stocker.config import get_settings
from stocker.database import init_db, ping_db, close_db
from stocker.services.notification_service import bus, log_toasts
from stocker.services.product_source import ProductSourceError, get_product_source
from stocker.utils.logger import get_logger

logger = get_logger("main")
settings = get_settings()

# Routers
from stocker.routers import auth as auth_router
from stocker.routers import products as products_router
from stocker.routers import dashboard as dashboard_router
from stocker.routers import notifications as notifications_router

app = FastAPI(
    title="Stocker API",
    debug=settings.APP_DEBUG,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router.router)
app.include_router(products_router.router)
app.include_router(dashboard_router.router)
app.include_router(notifications_router.router)


# Error handlers
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    logger.warning(f"HTTP {exc.status_code}: {exc.detail} - Path: {request.url.path}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail, "status_code": exc.status_code},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Validation error: {exc.errors()} - Path: {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "message": "Invalid request",
            "errors": jsonable_encoder(exc.errors()),
            "status_code": 400,
        },
    )


@app.exception_handler(ProductSourceError)
async def product_source_exception_handler(request: Request, exc: ProductSourceError):
    logger.error(f"Product source error: {exc} - Path: {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": str(exc)},
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error", "status_code": 500},
    )


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    logger.info(
        f"{request.method} {request.url.path} - "
        f"Status: {response.status_code} - "
        f"Time: {process_time:.3f}s"
    )
    return response


@app.get("/healthz")
async def healthz():
    return {"status": "ok"}


@app.get("/readyz")
async def readyz():
    if not await ping_db():
        raise HTTPException(status_code=503, detail="Database not ready")
    return {"status": "ok", "database": "up"}


_unsubscribe_toast_log = None


@app.on_event("startup")
async def on_startup():
    global _unsubscribe_toast_log
    print("=" * 60)
    print("🚀 [STARTUP] Starting application...")
    print(f"   📦 Product source: {settings.PRODUCT_SOURCE}")
    print(f"   📖 Swagger UI: http://localhost:8000/docs")
    print("=" * 60)
    logger.info("Starting application...")

    # fail fast on a bad PRODUCT_SOURCE instead of on the first request
    get_product_source()

    await init_db()
    logger.info("Database initialized")
    _unsubscribe_toast_log = bus.subscribe(log_toasts)
    print("✅ [STARTUP] Application ready!")


@app.on_event("shutdown")
async def on_shutdown():
    if _unsubscribe_toast_log:
        _unsubscribe_toast_log()
    close_db()
    logger.info("Shutting down application...")
