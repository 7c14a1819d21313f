# starinvest/services/payments.py

import logging

from pymongo.errors import PyMongoError

from starinvest.config import FRONTEND_URL
from starinvest.errors import InternalError, UpstreamFailure
from starinvest.models.transaction import Transaction, PROCESSING
from starinvest.schemas.payment import InitiatePaymentRequest
from starinvest.stores.transactions import TransactionLedger
from starinvest.utils.clock import utcnow
from starinvest.utils.marzpay import MarzPayClient, GatewayError
from starinvest.utils.security import new_opaque_id

logger = logging.getLogger("uvicorn.error")


class PaymentManager:
    """Starts MarzPay collections and mirrors their status locally.

    The gateway owns transaction identity and status. A local record is
    written only after MarzPay accepted the collection, and its status is
    only ever copied from a MarzPay status response.
    """

    def __init__(self, gateway: MarzPayClient, ledger: TransactionLedger):
        self.gateway = gateway
        self.ledger = ledger

    def initiate(self, request: InitiatePaymentRequest) -> dict:
        reference = new_opaque_id()
        description = request.description or f"Investment: {request.planName} Plan"
        logger.info(f"Initiating payment {reference}: {request.amount} from {request.phone} for {request.planName}")

        try:
            data = self.gateway.collect(
                amount=request.amount,
                phone=request.phone,
                reference=reference,
                description=description,
                callback_url=f"{FRONTEND_URL}/payment-callback",
            )
        except GatewayError as e:
            raise UpstreamFailure(e.message or "Payment initiation failed")

        gateway_transaction = data["transaction"]
        transaction = Transaction(
            id=gateway_transaction["uuid"],
            reference=reference,
            phone=request.phone,
            amount=request.amount,
            planName=request.planName,
            description=description,
            status=PROCESSING,
            createdAt=utcnow(),
        )
        try:
            self.ledger.create(transaction)
        except PyMongoError as e:
            logger.error(f"Could not record transaction {transaction.id} (reference {reference}): {e}")
            raise InternalError("Payment initiation failed")

        return {"transaction": gateway_transaction, "collection": data.get("collection")}

    def check_status(self, transaction_id: str) -> dict:
        try:
            data = self.gateway.query(transaction_id)
        except GatewayError:
            raise UpstreamFailure("Failed to check payment status")

        status = (data.get("transaction") or {}).get("status")
        if status:
            try:
                updated = self.ledger.update_status(transaction_id, status, updated_at=utcnow())
            except PyMongoError as e:
                logger.error(f"Could not update transaction {transaction_id}: {e}")
                raise InternalError("Failed to check payment status")
            if not updated:
                logger.info(f"Status check for untracked transaction {transaction_id}")
        return data
