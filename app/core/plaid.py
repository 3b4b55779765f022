# app/core/plaid.py
import logging
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel

from app.core.config import settings
from app.core.http_utils import with_retry

logger = logging.getLogger(__name__)

PLAID_BASE_URLS = {
    "sandbox": "https://sandbox.plaid.com",
    "development": "https://development.plaid.com",
    "production": "https://production.plaid.com",
}

# Largest page /transactions/get will return
TRANSACTIONS_PAGE_SIZE = 500


class PlaidError(Exception):
    """A failed Plaid call, carrying Plaid's own error code and message."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        status_code: Optional[int] = None,
        retryable: bool = False,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.retryable = retryable

    def __str__(self) -> str:
        if self.error_code:
            return f"{self.error_code}: {self.message}"
        return self.message


class ItemInfo(BaseModel):
    item_id: str
    institution_id: str
    institution_name: str


class AccountInfo(BaseModel):
    account_id: str
    name: str
    account_type: str
    balance: float
    currency: str = "USD"


class TransactionInfo(BaseModel):
    transaction_id: str
    account_id: str
    # Plaid convention: positive = money leaving the account
    amount: float
    date: date
    name: str
    merchant_name: Optional[str] = None
    pending: bool = False
    # Set on a posted transaction that replaces an earlier pending one
    pending_transaction_id: Optional[str] = None


class PlaidClient:
    """
    Thin async wrapper around the Plaid REST API.

    Every request carries the client id and secret in its body and has an
    explicit timeout. Read-only calls are retried once on network errors and
    5xx responses; token creation and exchange are attempted exactly once.
    """

    def __init__(
        self,
        client_id: str,
        secret: str,
        env: str = "sandbox",
        client_name: str = "Finance Budget App",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.client_id = client_id
        self.secret = secret
        self.env = env
        self.client_name = client_name
        self.timeout = timeout
        self._transport = transport

    @property
    def base_url(self) -> str:
        return PLAID_BASE_URLS.get(self.env, PLAID_BASE_URLS["sandbox"])

    async def _post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        body = {"client_id": self.client_id, "secret": self.secret, **payload}
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(path, json=body)
        except httpx.TransportError as e:
            raise PlaidError(f"Request to {path} failed: {str(e)}", retryable=True) from e

        if response.status_code >= 400:
            try:
                error = response.json()
            except ValueError:
                error = {}
            raise PlaidError(
                error.get("error_message") or response.text or f"HTTP {response.status_code}",
                error_code=error.get("error_code"),
                status_code=response.status_code,
                retryable=response.status_code >= 500,
            )
        return response.json()

    async def create_link_token(self, user_id: str) -> str:
        data = await self._post("/link/token/create", {
            "user": {"client_user_id": user_id},
            "client_name": self.client_name,
            "products": ["transactions"],
            "country_codes": ["US"],
            "language": "en",
        })
        return data["link_token"]

    async def exchange_public_token(self, public_token: str) -> Dict[str, str]:
        data = await self._post("/item/public_token/exchange", {"public_token": public_token})
        return {"access_token": data["access_token"], "item_id": data["item_id"]}

    @with_retry(max_retries=1)
    async def get_item(self, access_token: str) -> ItemInfo:
        data = await self._post("/item/get", {"access_token": access_token})
        item = data["item"]
        institution_id = item.get("institution_id") or ""
        institution_name = institution_id

        if institution_id:
            try:
                inst = await self._post("/institutions/get_by_id", {
                    "institution_id": institution_id,
                    "country_codes": ["US"],
                })
                institution_name = inst["institution"].get("name") or institution_id
            except PlaidError as e:
                logger.warning(f"Institution lookup failed for {institution_id}: {str(e)}")

        return ItemInfo(
            item_id=item.get("item_id", ""),
            institution_id=institution_id,
            institution_name=institution_name,
        )

    @with_retry(max_retries=1)
    async def get_accounts(self, access_token: str) -> List[AccountInfo]:
        data = await self._post("/accounts/get", {"access_token": access_token})
        return [
            AccountInfo(
                account_id=a["account_id"],
                name=a["name"],
                account_type=a.get("type") or "other",
                balance=a.get("balances", {}).get("current") or 0.0,
                currency=a.get("balances", {}).get("iso_currency_code") or "USD",
            )
            for a in data["accounts"]
        ]

    @with_retry(max_retries=1)
    async def get_transactions(
        self,
        access_token: str,
        days: int = 30,
        today: Optional[date] = None,
    ) -> List[TransactionInfo]:
        end_date = today or date.today()
        start_date = end_date - timedelta(days=days)

        transactions: List[TransactionInfo] = []
        while True:
            data = await self._post("/transactions/get", {
                "access_token": access_token,
                "start_date": start_date.isoformat(),
                "end_date": end_date.isoformat(),
                "options": {"count": TRANSACTIONS_PAGE_SIZE, "offset": len(transactions)},
            })
            page = data.get("transactions", [])
            for t in page:
                transactions.append(TransactionInfo(
                    transaction_id=t["transaction_id"],
                    account_id=t["account_id"],
                    amount=t["amount"],
                    date=t["date"],
                    name=t["name"],
                    merchant_name=t.get("merchant_name"),
                    pending=t.get("pending", False),
                    pending_transaction_id=t.get("pending_transaction_id"),
                ))
            if not page or len(transactions) >= data.get("total_transactions", 0):
                break

        logger.info(f"Fetched {len(transactions)} Plaid transactions from {start_date} to {end_date}")
        return transactions


def get_plaid_client() -> PlaidClient:
    """FastAPI dependency returning a client configured from settings"""
    if not settings.plaid_configured:
        raise PlaidError("Plaid credentials are not configured")
    return PlaidClient(
        client_id=settings.PLAID_CLIENT_ID,
        secret=settings.PLAID_SECRET,
        env=settings.PLAID_ENV,
        client_name=settings.PLAID_CLIENT_NAME,
        timeout=settings.PLAID_TIMEOUT_SECONDS,
    )
