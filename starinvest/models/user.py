# starinvest/models/user.py

from pydantic import BaseModel, Field, field_serializer
from typing import Optional, List
from datetime import datetime

from starinvest.utils.clock import isoformat_utc


class UserSummary(BaseModel):
    """The only user shape that leaves the service."""
    id: str
    phone: str
    email: str
    isVerified: bool
    createdAt: datetime
    verifiedAt: Optional[datetime] = None

    @field_serializer("createdAt", "verifiedAt")
    def serialize_timestamp(self, value: Optional[datetime]):
        return isoformat_utc(value) if value else None


class UserInDB(BaseModel):
    id: str
    phone: str
    email: str
    passwordHash: str
    referralCode: Optional[str] = None
    isVerified: bool = False
    verificationToken: Optional[str] = None
    verificationTokenIssuedAt: Optional[datetime] = None
    createdAt: datetime
    verifiedAt: Optional[datetime] = None
    investments: List[dict] = Field(default_factory=list)

    def summary(self) -> UserSummary:
        return UserSummary(
            id=self.id,
            phone=self.phone,
            email=self.email,
            isVerified=self.isVerified,
            createdAt=self.createdAt,
            verifiedAt=self.verifiedAt,
        )
