from fastapi import Depends, Header

from starinvest.dependencies import get_account_manager
from starinvest.errors import Unauthorized
from starinvest.models.user import UserSummary
from starinvest.services.accounts import AccountManager
from starinvest.utils.security import decode_access_token


def get_current_user(
    authorization: str = Header(None),
    accounts: AccountManager = Depends(get_account_manager),
) -> UserSummary:
    """Resolves the bearer token issued at login to the user it was issued for."""
    if not authorization or not authorization.startswith("Bearer "):
        raise Unauthorized("Missing token")

    token = authorization.split(" ", 1)[1]
    payload = decode_access_token(token)
    if not payload or not payload.get("sub"):
        raise Unauthorized("Invalid token")
    return accounts.current_user(payload["sub"])
