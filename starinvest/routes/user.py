from fastapi import APIRouter, Depends

from starinvest.dependencies import get_account_manager
from starinvest.services.accounts import AccountManager
from starinvest.utils.responses import envelope

router = APIRouter()


@router.get("/investments/{phone}")
def get_investments(phone: str, accounts: AccountManager = Depends(get_account_manager)):
    return envelope(accounts.get_investments(phone))
