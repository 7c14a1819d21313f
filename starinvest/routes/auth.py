from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from starinvest.dependencies import get_account_manager
from starinvest.middleware.auth_middleware import get_current_user
from starinvest.models.user import UserSummary
from starinvest.schemas.auth import RegisterRequest, LoginRequest, ResendVerificationRequest
from starinvest.services.accounts import AccountManager
from starinvest.utils.responses import envelope

router = APIRouter()


@router.post("/register")
def register(request: RegisterRequest, accounts: AccountManager = Depends(get_account_manager)):
    result = accounts.register(request)
    return envelope(
        result,
        message="Registration successful! Please check your email to verify your account.",
        status_code=status.HTTP_201_CREATED,
    )


@router.get("/verify-email")
def verify_email(token: Optional[str] = Query(None), accounts: AccountManager = Depends(get_account_manager)):
    result = accounts.verify_email(token)
    return envelope(result, message="Email verified successfully! You can now login.")


@router.post("/login")
def login(credentials: LoginRequest, accounts: AccountManager = Depends(get_account_manager)):
    result = accounts.login(credentials)
    return envelope(result, message="Login successful")


@router.post("/resend-verification")
def resend_verification(request: ResendVerificationRequest, accounts: AccountManager = Depends(get_account_manager)):
    result = accounts.resend_verification(request)
    return envelope(result, message="Verification email sent successfully")


@router.get("/me")
def me(user: UserSummary = Depends(get_current_user)):
    return envelope({"user": user})
