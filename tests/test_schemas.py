"""Request schemas reject bad input before a manager sees it."""

import pydantic
import pytest

from starinvest.schemas.auth import RegisterRequest, LoginRequest, ResendVerificationRequest
from starinvest.schemas.payment import InitiatePaymentRequest


def error_message(exc_info) -> str:
    return str(exc_info.value.errors()[0]["ctx"]["error"])


@pytest.mark.parametrize("fields,message", [
    ({}, "Phone number, email, and password are required"),
    ({"phone": "+25670000000", "email": "a@x.com", "password": "secret1", "confirmPassword": "secret1"},
     "Invalid phone number format. Use format: +256xxxxxxxxx"),
    ({"phone": "+254700000001", "email": "a@x.com", "password": "secret1", "confirmPassword": "secret1"},
     "Invalid phone number format. Use format: +256xxxxxxxxx"),
    ({"phone": "+256700000001", "email": "a@x", "password": "secret1", "confirmPassword": "secret1"},
     "Invalid email format"),
    ({"phone": "+256700000001", "email": "a@x.com", "password": "12345", "confirmPassword": "12345"},
     "Password must be at least 6 characters long"),
    ({"phone": "+256700000001", "email": "a@x.com", "password": "secret1"},
     "Passwords do not match"),
])
def test_register_rejections(fields, message):
    with pytest.raises(pydantic.ValidationError) as exc:
        RegisterRequest(**fields)
    assert error_message(exc) == message


def test_register_accepts_optional_referral():
    request = RegisterRequest(phone="+256700000001", email="a@x.com", password="secret1", confirmPassword="secret1")
    assert request.referralCode is None


def test_login_checks_phone_format():
    with pytest.raises(pydantic.ValidationError) as exc:
        LoginRequest(phone="256700000001", password="secret1")
    assert error_message(exc) == "Invalid phone number format"


def test_resend_requires_email():
    with pytest.raises(pydantic.ValidationError) as exc:
        ResendVerificationRequest()
    assert error_message(exc) == "Email is required"


@pytest.mark.parametrize("amount", [500, 10_000_000])
def test_payment_amount_bounds_are_inclusive(amount):
    assert InitiatePaymentRequest(phone="+256700000001", amount=amount, planName="Gold").amount == amount


def test_payment_requires_plan():
    with pytest.raises(pydantic.ValidationError) as exc:
        InitiatePaymentRequest(phone="+256700000001", amount=1000)
    assert error_message(exc) == "Phone number, amount, and plan name are required"


@pytest.mark.parametrize("phone,email,message", [
    ("+256700000001\n", "a@x.com", "Invalid phone number format. Use format: +256xxxxxxxxx"),
    ("+256700000001", "a@x.com\n", "Invalid email format"),
    (" +256700000001", "a@x.com", "Invalid phone number format. Use format: +256xxxxxxxxx"),
])
def test_register_rejects_trailing_or_leading_junk(phone, email, message):
    with pytest.raises(pydantic.ValidationError) as exc:
        RegisterRequest(phone=phone, email=email, password="secret1", confirmPassword="secret1")
    assert error_message(exc) == message


def test_payment_rejects_phone_with_trailing_newline():
    with pytest.raises(pydantic.ValidationError) as exc:
        InitiatePaymentRequest(phone="+256700000001\n", amount=1000, planName="Gold")
    assert error_message(exc) == "Invalid phone number format"
