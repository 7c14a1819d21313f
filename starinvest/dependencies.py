# starinvest/dependencies.py
# Tests swap these out through app.dependency_overrides

from functools import lru_cache

from starinvest.db import users_collection, transactions_collection
from starinvest.services.accounts import AccountManager
from starinvest.services.payments import PaymentManager
from starinvest.stores.transactions import TransactionLedger
from starinvest.stores.users import UserStore
from starinvest.utils.email import EmailSender
from starinvest.utils.marzpay import MarzPayClient


@lru_cache
def get_account_manager() -> AccountManager:
    return AccountManager(UserStore(users_collection), EmailSender())


@lru_cache
def get_payment_manager() -> PaymentManager:
    return PaymentManager(MarzPayClient(), TransactionLedger(transactions_collection))
