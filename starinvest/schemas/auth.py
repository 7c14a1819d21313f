from pydantic import BaseModel, model_validator
from typing import Optional

from starinvest.config import PASSWORD_MIN_LENGTH
from starinvest.utils.validators import (
    is_valid_phone,
    is_valid_email,
    is_valid_password,
    phone_format_hint,
)

PASSWORD_LENGTH_MESSAGE = f"Password must be at least {PASSWORD_MIN_LENGTH} characters long"


class RegisterRequest(BaseModel):
    phone: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    confirmPassword: Optional[str] = None
    referralCode: Optional[str] = None

    @model_validator(mode="after")
    def check_fields(self):
        # Checks run in order and the first failure is the one reported
        if not self.phone or not self.email or not self.password:
            raise ValueError("Phone number, email, and password are required")
        if not is_valid_phone(self.phone):
            raise ValueError(f"Invalid phone number format. Use format: {phone_format_hint()}")
        if not is_valid_email(self.email):
            raise ValueError("Invalid email format")
        if not is_valid_password(self.password):
            raise ValueError(PASSWORD_LENGTH_MESSAGE)
        if self.password != self.confirmPassword:
            raise ValueError("Passwords do not match")
        return self


class LoginRequest(BaseModel):
    phone: Optional[str] = None
    password: Optional[str] = None

    @model_validator(mode="after")
    def check_fields(self):
        if not self.phone or not self.password:
            raise ValueError("Phone number and password are required")
        if not is_valid_phone(self.phone):
            raise ValueError("Invalid phone number format")
        if not is_valid_password(self.password):
            raise ValueError(PASSWORD_LENGTH_MESSAGE)
        return self


class ResendVerificationRequest(BaseModel):
    email: Optional[str] = None

    @model_validator(mode="after")
    def check_fields(self):
        if not self.email:
            raise ValueError("Email is required")
        return self
