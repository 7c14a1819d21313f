import re

from starinvest.config import PHONE_COUNTRY_CODE, PASSWORD_MIN_LENGTH, PAYMENT_MIN_AMOUNT, PAYMENT_MAX_AMOUNT

PHONE_REGEX = re.compile(rf"\+{re.escape(PHONE_COUNTRY_CODE)}[0-9]{{9}}")
EMAIL_REGEX = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def is_valid_phone(phone) -> bool:
    return isinstance(phone, str) and bool(PHONE_REGEX.fullmatch(phone))


def is_valid_email(email) -> bool:
    return isinstance(email, str) and bool(EMAIL_REGEX.fullmatch(email))


def is_valid_password(password) -> bool:
    return bool(password) and len(password) >= PASSWORD_MIN_LENGTH


def is_valid_amount(amount) -> bool:
    return PAYMENT_MIN_AMOUNT <= amount <= PAYMENT_MAX_AMOUNT


def phone_format_hint() -> str:
    return f"+{PHONE_COUNTRY_CODE}xxxxxxxxx"
