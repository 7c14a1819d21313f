# starinvest/models/transaction.py

from pydantic import BaseModel
from typing import Optional
from datetime import datetime

PROCESSING = "processing"


class Transaction(BaseModel):
    id: str  # gateway-assigned uuid
    reference: str
    phone: str
    amount: int
    planName: str
    description: Optional[str] = None
    status: str = PROCESSING
    createdAt: datetime
    updatedAt: Optional[datetime] = None
