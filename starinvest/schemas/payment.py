from pydantic import BaseModel, model_validator
from typing import Optional

from starinvest.config import PAYMENT_MIN_AMOUNT, PAYMENT_MAX_AMOUNT
from starinvest.utils.validators import is_valid_phone, is_valid_amount


class InitiatePaymentRequest(BaseModel):
    phone: Optional[str] = None
    amount: Optional[int] = None
    planName: Optional[str] = None
    description: Optional[str] = None

    @model_validator(mode="after")
    def check_fields(self):
        if not self.phone or not self.amount or not self.planName:
            raise ValueError("Phone number, amount, and plan name are required")
        if not is_valid_phone(self.phone):
            raise ValueError("Invalid phone number format")
        if not is_valid_amount(self.amount):
            raise ValueError(
                f"Amount must be between {PAYMENT_MIN_AMOUNT:,} and {PAYMENT_MAX_AMOUNT:,} UGX"
            )
        return self
