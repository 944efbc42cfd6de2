import logging
from typing import Any, Optional

import requests

from .config import Settings
from .errors import InsufficientCredits


class CreditLedger:
    """
    Client for the external credit-ledger debit procedure.

    The gateway owns no balance state; it issues one debit call per request
    and only distinguishes "debited", "insufficient balance" and "ledger
    unavailable". An unavailable ledger does not block the request.
    """

    def __init__(self, rpc_url: Optional[str], api_key: Optional[str] = None, timeout: float = 10.0):
        self.rpc_url = rpc_url
        self.api_key = api_key
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "CreditLedger":
        return cls(settings.credit_rpc_url, settings.credit_rpc_key)

    def _headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["apikey"] = self.api_key
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    @staticmethod
    def _debited(result: Any) -> bool:
        if isinstance(result, dict):
            return bool(result.get("success", False))
        return bool(result)

    def debit(self, user_id: str, amount: int = 1) -> None:
        """
        Debits `amount` credits from the user's balance.

        Args:
            user_id: The authenticated principal's uid.
            amount: Credits to deduct.

        Raises:
            InsufficientCredits: If the ledger reports the balance cannot cover the debit.
        """
        if not self.rpc_url:
            logging.warning("CREDIT_RPC_URL not set; credit metering is disabled for this request.")
            return

        try:
            resp = requests.post(
                self.rpc_url,
                json={"user_id": user_id, "amount": amount},
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logging.error(f"Credit ledger unreachable for user {user_id}, proceeding without debit: {e}")
            return

        if resp.status_code == 402:
            raise InsufficientCredits()
        if not resp.ok:
            logging.error(f"Credit ledger error {resp.status_code} for user {user_id}, proceeding without debit: {resp.text}")
            return

        try:
            result = resp.json()
        except ValueError:
            logging.error(f"Credit ledger returned non-JSON body for user {user_id}, proceeding without debit.")
            return

        if not self._debited(result):
            raise InsufficientCredits()
        logging.info(f"Debited {amount} credit(s) from user {user_id}")
