from fastapi import APIRouter, Depends

from starinvest.dependencies import get_payment_manager
from starinvest.schemas.payment import InitiatePaymentRequest
from starinvest.services.payments import PaymentManager
from starinvest.utils.responses import envelope

router = APIRouter()


@router.post("/initiate")
def initiate_payment(request: InitiatePaymentRequest, payments: PaymentManager = Depends(get_payment_manager)):
    result = payments.initiate(request)
    return envelope(result, message="Payment initiated successfully")


@router.get("/status/{transaction_id}")
def payment_status(transaction_id: str, payments: PaymentManager = Depends(get_payment_manager)):
    return envelope(payments.check_status(transaction_id))
