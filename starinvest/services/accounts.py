# starinvest/services/accounts.py

import logging
from datetime import timedelta

from pymongo.errors import PyMongoError

from starinvest.config import FRONTEND_URL, VERIFICATION_TOKEN_TTL_HOURS
from starinvest.errors import (
    BadRequest,
    Conflict,
    Forbidden,
    InternalError,
    NotFound,
    UpstreamFailure,
    Unauthorized,
    ValidationError,
)
from starinvest.models.user import UserInDB, UserSummary
from starinvest.schemas.auth import RegisterRequest, LoginRequest, ResendVerificationRequest
from starinvest.stores.users import UserStore, DuplicateUserError
from starinvest.utils.clock import utcnow
from starinvest.utils.email import EmailSender, VERIFICATION_SUBJECT, build_verification_email
from starinvest.utils.security import (
    get_password_hash,
    verify_password,
    new_opaque_id,
    create_access_token,
)

logger = logging.getLogger("uvicorn.error")

PHONE_TAKEN = "An account with this phone number already exists"
EMAIL_TAKEN = "An account with this email already exists"
BAD_CREDENTIALS = "Invalid phone number or password"


class AccountManager:
    """Registration, email verification, login and verification resend.

    A user starts unverified holding one outstanding token. Resend swaps the
    token for a new one; verification consumes it and flips ``isVerified``
    for good. Verified users have no token, so every later verify attempt
    is a NotFound.
    """

    def __init__(self, users: UserStore, mailer: EmailSender):
        self.users = users
        self.mailer = mailer

    def _send_verification(self, email: str, token: str) -> bool:
        url = f"{FRONTEND_URL}/verify-email?token={token}"
        return self.mailer.send(email, VERIFICATION_SUBJECT, build_verification_email(url))

    def register(self, request: RegisterRequest) -> dict:
        logger.info(f"Registration attempt: phone={request.phone} email={request.email}")
        try:
            if self.users.find_by_phone(request.phone):
                raise Conflict(PHONE_TAKEN)
            if self.users.find_by_email(request.email):
                raise Conflict(EMAIL_TAKEN)

            now = utcnow()
            user = UserInDB(
                id=new_opaque_id(),
                phone=request.phone,
                email=request.email,
                passwordHash=get_password_hash(request.password),
                referralCode=request.referralCode or None,
                isVerified=False,
                verificationToken=new_opaque_id(),
                verificationTokenIssuedAt=now,
                createdAt=now,
            )
            self.users.create(user)
        except DuplicateUserError as e:
            # Lost a race with a concurrent registration
            raise Conflict(PHONE_TAKEN if e.field == "phone" else EMAIL_TAKEN)
        except PyMongoError as e:
            logger.error(f"Registration error: {e}")
            raise InternalError("Registration failed. Please try again.")

        email_sent = self._send_verification(user.email, user.verificationToken)
        if not email_sent:
            logger.warning(f"Verification email to {user.email} failed, but user {user.id} was created")

        return {"user": user.summary(), "emailSent": email_sent}

    def verify_email(self, token: str | None) -> dict:
        if not token:
            raise ValidationError("Verification token is required")

        now = utcnow()
        issued_after = now - timedelta(hours=VERIFICATION_TOKEN_TTL_HOURS)
        try:
            user = self.users.mark_verified(token, issued_after=issued_after, verified_at=now)
        except PyMongoError as e:
            logger.error(f"Email verification error: {e}")
            raise InternalError("Email verification failed")

        if not user:
            # Unknown, already consumed and expired tokens are indistinguishable here
            raise NotFound("Invalid or expired verification token")

        logger.info(f"User {user.id} verified their email")
        return {"user": user.summary()}

    def login(self, request: LoginRequest) -> dict:
        try:
            user = self.users.find_by_phone(request.phone)
        except PyMongoError as e:
            logger.error(f"Login error: {e}")
            raise InternalError("Login failed. Please try again.")

        if not user:
            raise Unauthorized(BAD_CREDENTIALS)
        if not user.isVerified:
            raise Forbidden("Please verify your email address before logging in")
        if not verify_password(request.password, user.passwordHash):
            raise Unauthorized(BAD_CREDENTIALS)

        access_token = create_access_token({"sub": user.id, "phone": user.phone})
        return {"user": user.summary(), "accessToken": access_token, "tokenType": "bearer"}

    def resend_verification(self, request: ResendVerificationRequest) -> dict:
        try:
            user = self.users.find_by_email(request.email)
            if not user:
                raise NotFound("User not found")
            if user.isVerified:
                raise BadRequest("Email is already verified")

            token = new_opaque_id()
            rotated = self.users.rotate_token(request.email, token, issued_at=utcnow())
        except PyMongoError as e:
            logger.error(f"Resend verification error: {e}")
            raise InternalError("Failed to resend verification email")

        if not rotated:
            # Verified between the lookup and the rotation
            raise BadRequest("Email is already verified")

        if not self._send_verification(rotated.email, token):
            raise UpstreamFailure("Failed to send verification email")
        return {"emailSent": True}

    def get_investments(self, phone: str) -> dict:
        try:
            user = self.users.find_by_phone(phone)
        except PyMongoError as e:
            logger.error(f"Get investments error: {e}")
            raise InternalError("Failed to get investments")
        if not user:
            raise NotFound("User not found")
        return {"investments": user.investments}

    def current_user(self, user_id: str) -> UserSummary:
        try:
            user = self.users.find_by_id(user_id)
        except PyMongoError as e:
            logger.error(f"Session lookup error: {e}")
            raise InternalError()
        if not user:
            raise NotFound("User not found")
        return user.summary()
