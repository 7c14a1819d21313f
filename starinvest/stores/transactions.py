# starinvest/stores/transactions.py

from datetime import datetime
from typing import Optional

from starinvest.models.transaction import Transaction

_PROJECTION = {"_id": 0}


class TransactionLedger:
    """Locally tracked payments, keyed by the gateway transaction id."""

    def __init__(self, collection):
        self.collection = collection

    def create(self, transaction: Transaction) -> Transaction:
        self.collection.insert_one(transaction.model_dump())
        return transaction

    def get(self, transaction_id: str) -> Optional[Transaction]:
        doc = self.collection.find_one({"id": transaction_id}, _PROJECTION)
        return Transaction(**doc) if doc else None

    def update_status(self, transaction_id: str, status: str, updated_at: datetime) -> bool:
        # Status only ever comes from the gateway, so the write is unconditional
        result = self.collection.update_one(
            {"id": transaction_id},
            {"$set": {"status": status, "updatedAt": updated_at}},
        )
        return result.matched_count > 0
