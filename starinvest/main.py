import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from pymongo.errors import PyMongoError

from starinvest.config import CORS_ORIGINS, FRONTEND_URL, LOG_LEVEL
from starinvest.db import ensure_indexes, users_collection, transactions_collection
from starinvest.errors import ServiceError
from starinvest.routes import auth, payment, user
from starinvest.utils.clock import utcnow, isoformat_utc
from starinvest.utils.responses import envelope

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger("uvicorn.error")

app = FastAPI(title="Star Investments API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router, prefix="/api/auth")
app.include_router(payment.router, prefix="/api/payment")
app.include_router(user.router, prefix="/api/user")


@app.on_event("startup")
def startup_db_client():
    try:
        ensure_indexes(users_collection, transactions_collection)
        logger.info("Connected to MongoDB, indexes in place")
    except PyMongoError as e:
        # Phone and email uniqueness depends on these indexes
        logger.error(f"Failed to create MongoDB indexes: {e}")
        raise
    logger.info(f"Frontend URL: {FRONTEND_URL}")


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    return envelope(message=exc.message, success=False, status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        # Our schema validators raise ValueError with the message meant for the client
        error = (first.get("ctx") or {}).get("error")
        message = str(error) if error else first.get("msg", message)
        message = message.removeprefix("Value error, ")
    return envelope(message=message, success=False, status_code=400)


@app.exception_handler(Exception)
async def universal_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled exception on path %s:\n%s", request.url.path, traceback.format_exc())
    return envelope(message="Internal server error", success=False, status_code=500)


@app.get("/api/health")
def health_check():
    return {"success": True, "message": "Server is running", "timestamp": isoformat_utc(utcnow())}
