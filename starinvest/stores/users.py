# starinvest/stores/users.py

from datetime import datetime
from typing import Optional

from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from starinvest.models.user import UserInDB

# Never hand Mongo's ObjectId back to callers
_PROJECTION = {"_id": 0}


class DuplicateUserError(Exception):
    """Raised when an insert collides with an existing phone or email."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"duplicate {field}")


class UserStore:
    """Identity store over the ``users`` collection.

    Uniqueness of ``phone`` and ``email`` is enforced by unique indexes (see
    ``starinvest.db.ensure_indexes``), so ``create`` is safe against two
    concurrent registrations for the same phone. Verification and token
    rotation are single ``find_one_and_update`` calls.
    """

    def __init__(self, collection):
        self.collection = collection

    def _load(self, doc) -> Optional[UserInDB]:
        if not doc:
            return None
        doc.pop("_id", None)
        return UserInDB(**doc)

    def create(self, user: UserInDB) -> UserInDB:
        try:
            self.collection.insert_one(user.model_dump())
        except DuplicateKeyError:
            # Report the same field a sequential check would: phone first
            if self.collection.find_one({"phone": user.phone}, _PROJECTION):
                raise DuplicateUserError("phone")
            if self.collection.find_one({"email": user.email}, _PROJECTION):
                raise DuplicateUserError("email")
            raise
        return user

    def find_by_phone(self, phone: str) -> Optional[UserInDB]:
        return self._load(self.collection.find_one({"phone": phone}, _PROJECTION))

    def find_by_email(self, email: str) -> Optional[UserInDB]:
        return self._load(self.collection.find_one({"email": email}, _PROJECTION))

    def find_by_id(self, user_id: str) -> Optional[UserInDB]:
        return self._load(self.collection.find_one({"id": user_id}, _PROJECTION))

    def mark_verified(self, token: str, issued_after: datetime, verified_at: datetime) -> Optional[UserInDB]:
        """Consume ``token`` if it is outstanding and was issued after ``issued_after``.

        Returns the updated user, or None when no unverified user holds a
        fresh enough copy of the token. Only one of several concurrent calls
        with the same token can match.
        """
        doc = self.collection.find_one_and_update(
            {
                "verificationToken": token,
                "isVerified": False,
                "verificationTokenIssuedAt": {"$gte": issued_after},
            },
            {
                "$set": {"isVerified": True, "verifiedAt": verified_at},
                "$unset": {"verificationToken": "", "verificationTokenIssuedAt": ""},
            },
            return_document=ReturnDocument.AFTER,
        )
        return self._load(doc)

    def rotate_token(self, email: str, token: str, issued_at: datetime) -> Optional[UserInDB]:
        """Replace the outstanding token of an unverified user, invalidating the old one."""
        doc = self.collection.find_one_and_update(
            {"email": email, "isVerified": False},
            {"$set": {"verificationToken": token, "verificationTokenIssuedAt": issued_at}},
            return_document=ReturnDocument.AFTER,
        )
        return self._load(doc)
