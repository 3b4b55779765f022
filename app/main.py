# app/main.py
import uvicorn
import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.api import api_router
from app.core.config import settings
from app.core.migrations import prepare_database
from app.core.plaid import PlaidError

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    openapi_tags=[
        {"name": "Authentication", "description": "Registration and login"},
        {"name": "analytics", "description": "Net worth, spending and income aggregations"},
        {"name": "plaid", "description": "Bank linking and transaction sync through Plaid"},
    ],
)

# CORS Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials="*" not in settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ------------------------------------------------------------
# ERROR HANDLERS
# Every error leaves the API as {"error": "<message>"}
# ------------------------------------------------------------
def error_response(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    else:
        message = "Invalid request"
    return error_response(400, message)

@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning(f"Integrity error on {request.url.path}: {str(exc.orig)}")
    return error_response(400, "Request conflicts with existing data or references a missing record")

@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Database error on {request.url.path}: {str(exc)}")
    return error_response(500, "Database error")

@app.exception_handler(PlaidError)
async def plaid_error_handler(request: Request, exc: PlaidError):
    logger.error(f"Plaid error on {request.url.path}: {str(exc)}")
    return error_response(500, f"Plaid request failed: {str(exc)}")

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for anything not handled above"""
    logger.exception(f"Unhandled exception on {request.url.path}: {exc}")
    return error_response(500, "Internal server error")

# ------------------------------------------------------------
# HEALTH CHECK ENDPOINT
# ------------------------------------------------------------
@app.get("/health", response_class=PlainTextResponse, tags=["Health"])
async def health_check():
    return "OK"

# ------------------------------------------------------------
# API ROUTES
# ------------------------------------------------------------
app.include_router(api_router, prefix="/api")

# ------------------------------------------------------------
# STARTUP EVENT
# ------------------------------------------------------------
@app.on_event("startup")
async def on_startup():
    """Apply migrations and seed default categories before serving requests"""
    await prepare_database()
    logger.info(f"✅ {settings.APP_NAME} ready ({settings.ENVIRONMENT})")
    if not settings.plaid_configured:
        logger.warning("⚠️ Plaid credentials not configured - bank linking will be unavailable")

if __name__ == "__main__":
    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.PORT, reload=False)
