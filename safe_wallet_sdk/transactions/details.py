"""
TxDetailsClient - retrieves transaction details from the Safe client gateway.
"""
import logging
import urllib.parse
from typing import Optional, Union

import requests
from pydantic import ValidationError

from ..config import SafeConfig
from ..exceptions import TxDetailsError
from .types import TxDetails, TxDetailsState

logger = logging.getLogger(__name__)


class TxDetailsClient:
    """
    Client for the transaction details endpoint of the client gateway.

    `get_transaction_details` raises on failure; `load` wraps the same call
    into a TxDetailsState so a live view can always render something.
    """

    def __init__(
        self,
        gateway_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the TxDetailsClient

        Args:
            gateway_url: Client gateway URL (defaults to SAFE_CLIENT_GATEWAY_URL
                or the public gateway)
            timeout: Request timeout in seconds (defaults to SAFE_HTTP_TIMEOUT or 10)
            session: HTTP session to reuse
            logger: Optional logger instance to use for debug/info logging

        Raises:
            ValueError: If the gateway URL is not HTTPS (unless local or
                SAFE_INSECURE_GW=1)
        """
        self.gateway_url = SafeConfig.get_gateway_url(gateway_url)
        self.timeout = SafeConfig.get_http_timeout(timeout)
        self.session = session or requests.Session()
        self.logger = logger or logging.getLogger(__name__)

    def details_url(self, chain_id: Union[str, int], tx_id: str) -> str:
        return (
            f"{self.gateway_url}/v1/chains/{urllib.parse.quote(str(chain_id), safe='')}"
            f"/transactions/{urllib.parse.quote(tx_id, safe='')}"
        )

    def get_transaction_details(self, chain_id: Union[str, int], tx_id: str) -> TxDetails:
        """
        Fetch the details of a transaction

        Args:
            chain_id: Chain the Safe lives on
            tx_id: Gateway transaction id (multisig or module id, or a tx hash)

        Returns:
            TxDetails

        Raises:
            TxDetailsError: On network failure, non-2xx status or an
                unexpected response body
        """
        if not tx_id:
            raise ValueError("tx_id must not be empty")

        url = self.details_url(chain_id, tx_id)
        self.logger.debug(f"Fetching transaction details from {url}")

        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            self.logger.error(f"Transaction details request failed: {e}")
            raise TxDetailsError(f"Failed to load transaction details: {e}", status_code=status_code) from e
        except ValueError as e:
            # requests' JSONDecodeError is both a ValueError and a RequestException
            self.logger.error(f"Invalid JSON response from gateway: {e}")
            raise TxDetailsError(f"Invalid JSON response from gateway: {e}") from e
        except requests.RequestException as e:
            self.logger.error(f"Transaction details request failed: {e}")
            raise TxDetailsError(f"Failed to load transaction details: {e}") from e

        try:
            return TxDetails.model_validate(payload)
        except ValidationError as e:
            self.logger.error(f"Unexpected transaction details payload: {e}")
            raise TxDetailsError(f"Unexpected transaction details payload: {e}") from e

    def load(self, chain_id: Union[str, int], tx_id: Optional[str]) -> TxDetailsState:
        """
        Fetch transaction details into a state snapshot, never raising.

        Without a `tx_id` there is nothing to load and the state stays idle.
        """
        if not tx_id:
            return TxDetailsState.idle()

        try:
            return TxDetailsState.loaded(self.get_transaction_details(chain_id, tx_id))
        except TxDetailsError as e:
            return TxDetailsState.errored(e)

    def close(self) -> None:
        self.session.close()
