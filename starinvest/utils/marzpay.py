# starinvest/utils/marzpay.py

import logging
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from starinvest.config import (
    MARZPAY_API_BASE_URL,
    MARZPAY_AUTH_HEADER,
    MARZPAY_COUNTRY,
    GATEWAY_TIMEOUT_SECONDS,
    GATEWAY_MAX_RETRIES,
)

logger = logging.getLogger("uvicorn.error")


class GatewayError(Exception):
    """A failed call to MarzPay. ``message`` is the upstream text when it sent one."""

    def __init__(self, message: str | None = None, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message or "MarzPay request failed")


class MarzPayClient:
    """Client for the MarzPay mobile-money collection API.

    Methods implemented:
    - collect(amount, phone, reference, description, callback_url)
    - query(transaction_id)

    Both return the ``data`` object of the response body. Collection requests
    carry our ``reference``, so retrying a POST cannot double charge.
    """

    def __init__(self, base_url=MARZPAY_API_BASE_URL, auth_header=MARZPAY_AUTH_HEADER,
                 country=MARZPAY_COUNTRY, timeout=GATEWAY_TIMEOUT_SECONDS,
                 max_retries=GATEWAY_MAX_RETRIES, session=None):
        self.base_url = base_url.rstrip("/")
        self.auth_header = auth_header
        self.country = country
        self.timeout = timeout
        if not self.auth_header:
            logger.warning("MARZPAY_AUTH_HEADER is not configured")
        self.session = session or self._build_session(max_retries)

    @staticmethod
    def _build_session(max_retries: int) -> requests.Session:
        retry = Retry(
            total=max_retries,
            backoff_factor=0.5,
            status_forcelist=(502, 503, 504),
            allowed_methods=frozenset({"GET", "POST"}),
            raise_on_status=False,
        )
        session = requests.Session()
        session.mount("https://", HTTPAdapter(max_retries=retry))
        session.mount("http://", HTTPAdapter(max_retries=retry))
        return session

    def _headers(self) -> dict:
        return {
            "Authorization": f"Basic {self.auth_header}",
            "Accept": "application/json",
        }

    def _request(self, method: str, path: str, **kwargs) -> dict:
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            r = self.session.request(method, url, headers=self._headers(), timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error(f"MarzPay {method} {url} failed: {e}")
            raise GatewayError() from e

        logger.debug("MarzPay %s %s -> %s", method, url, r.status_code)
        try:
            body = r.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if not r.ok or body.get("status") == "error":
            message = body.get("message")
            logger.error(f"MarzPay {method} {url} returned {r.status_code}: {message or r.text[:200]}")
            raise GatewayError(message, status_code=r.status_code)

        data = body.get("data")
        if not isinstance(data, dict):
            raise GatewayError(body.get("message"), status_code=r.status_code)
        return data

    def collect(self, amount: int, phone: str, reference: str, description: str, callback_url: str) -> dict:
        payload = {
            "amount": amount,
            "phone_number": phone,
            "country": self.country,
            "reference": reference,
            "description": description,
            "callback_url": callback_url,
        }
        # MarzPay takes collection requests as form fields
        data = self._request("POST", "/collect-money", data=payload)
        if not (data.get("transaction") or {}).get("uuid"):
            logger.error(f"MarzPay collect for {reference} returned no transaction uuid")
            raise GatewayError()
        return data

    def query(self, transaction_id: str) -> dict:
        return self._request("GET", f"/collect-money/{transaction_id}")
