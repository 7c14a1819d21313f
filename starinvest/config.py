import os
from dotenv import load_dotenv
from pathlib import Path

# Project root (the directory holding pyproject.toml)
BASE_DIR = Path(__file__).resolve().parent.parent

dotenv_path = os.path.join(BASE_DIR, ".env")
load_dotenv(dotenv_path=dotenv_path)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


# Session tokens
SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = _env_int("ACCESS_TOKEN_EXPIRE_MINUTES", 60)

# MongoDB
MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017")
MONGO_DB_NAME = os.getenv("MONGO_DB_NAME", "star_investments")
MONGO_TLS = _env_flag("MONGO_TLS", MONGO_URI.startswith("mongodb+srv://"))
MONGO_TIMEOUT_MS = _env_int("MONGO_TIMEOUT_MS", 5000)

# Frontend, used for verification links and payment callbacks
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000").rstrip("/")
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", FRONTEND_URL).split(",") if o.strip()]

# Email (SendGrid)
SENDGRID_API_KEY = os.getenv("SENDGRID_API_KEY")
SENDER_EMAIL = os.getenv("SENDER_EMAIL", "Star Investments <noreply@starinvest.com>")
EMAIL_TIMEOUT_SECONDS = _env_int("EMAIL_TIMEOUT_SECONDS", 10)
EMAIL_MAX_ATTEMPTS = max(1, _env_int("EMAIL_MAX_ATTEMPTS", 2))

# MarzPay collections
MARZPAY_API_BASE_URL = os.getenv("MARZPAY_API_BASE_URL", "https://wallet.wearemarz.com/api/v1").rstrip("/")
MARZPAY_AUTH_HEADER = os.getenv("MARZPAY_AUTH_HEADER", "")
MARZPAY_COUNTRY = os.getenv("MARZPAY_COUNTRY", "UG")
GATEWAY_TIMEOUT_SECONDS = _env_int("GATEWAY_TIMEOUT_SECONDS", 20)
GATEWAY_MAX_RETRIES = max(0, _env_int("GATEWAY_MAX_RETRIES", 2))

# Account and payment policy
PHONE_COUNTRY_CODE = os.getenv("PHONE_COUNTRY_CODE", "256")
PASSWORD_MIN_LENGTH = _env_int("PASSWORD_MIN_LENGTH", 6)
BCRYPT_ROUNDS = _env_int("BCRYPT_ROUNDS", 10)
VERIFICATION_TOKEN_TTL_HOURS = _env_int("VERIFICATION_TOKEN_TTL_HOURS", 24)
PAYMENT_MIN_AMOUNT = _env_int("PAYMENT_MIN_AMOUNT", 500)
PAYMENT_MAX_AMOUNT = _env_int("PAYMENT_MAX_AMOUNT", 10_000_000)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
