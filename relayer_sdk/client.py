"""
RelayClient - Main client for the Safe relayer.
"""
import json
import logging
import time
import urllib.parse
from typing import Any, Dict, Iterable, List, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .builder import build_safe_create_transaction_request, build_safe_transaction_request, derive_safe
from .config import ContractConfig, get_contract_config
from .constants import (
    GET_DEPLOYED,
    GET_NONCE,
    GET_TRANSACTION,
    GET_TRANSACTIONS,
    SUBMIT_TRANSACTION,
    ZERO_ADDRESS,
)
from .auth import BuilderAuthenticator
from .exceptions import AccountAlreadyDeployedError, AccountNotDeployedError, SignerUnavailableError
from .models import (
    GetDeployedResponse,
    NoncePayload,
    RelayerTransaction,
    SafeCreateTransactionArgs,
    SafeTransaction,
    SafeTransactionArgs,
    SubmitTransactionResponse,
    TransactionType,
)
from .response import PendingTransaction
from .signer import Signer, create_signer

DEFAULT_MAX_POLLS = 10
DEFAULT_POLL_FREQUENCY = 2.0
MIN_POLL_FREQUENCY = 1.0


class RelayClient:
    """
    Client for submitting gasless Safe transactions through a relayer.

    This client handles:
    1. Deriving the signer's Safe address
    2. Building and signing SAFE / SAFE-CREATE requests
    3. Submitting them and polling the relayer for their state

    Reads (nonce, transactions, deployment status) need no signer; submitting
    requires one.
    """

    def __init__(
        self,
        relayer_url: str,
        chain_id: int,
        signer: Optional[Any] = None,
        priv_key: Optional[str] = None,
        authenticator: Optional[BuilderAuthenticator] = None,
        contract_config: Optional[ContractConfig] = None,
        timeout: int = 30,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the RelayClient

        Args:
            relayer_url: Relayer base URL (e.g., "https://relayer-v2.polymarket.com")
            chain_id: Chain id the Safe lives on
            signer: Signer, LocalAccount, eth_keys PrivateKey or hex private key (optional)
            priv_key: Hex private key, shorthand for a LocalSigner (optional)
            authenticator: Header generator for authenticated endpoints (optional)
            contract_config: Contract addresses; looked up from chain_id if omitted
            timeout: Timeout for HTTP requests in seconds
            logger: Optional logger instance to use for debug/info logging

        Raises:
            ValueError: If the URL is not https (unless localhost) or chain_id is invalid
            UnsupportedNetworkError: If no contract config exists for chain_id
        """
        parsed = urllib.parse.urlparse(relayer_url)
        host = parsed.hostname or ""
        is_local = host in ("localhost", "127.0.0.1", "::1")
        if parsed.scheme != "https" and not is_local:
            raise ValueError(f"relayer_url must use https:// for security (got: {parsed.scheme}://)")

        if isinstance(chain_id, bool) or not isinstance(chain_id, int) or chain_id <= 0:
            raise ValueError(f"chain_id must be a positive integer, got: {chain_id!r}")

        self.relayer_url = relayer_url.rstrip("/")
        self.chain_id = chain_id
        self.contract_config = contract_config or get_contract_config(chain_id)
        self.authenticator = authenticator
        self.logger = logger or logging.getLogger(__name__)

        self.signer: Optional[Signer] = None
        if signer is not None:
            self.signer = create_signer(signer)
        elif priv_key:
            self.signer = create_signer(priv_key)

        # One call is one request; relayer errors reach the caller unretried
        self.session = requests.Session()
        retries = Retry(total=0, read=False, redirect=False, raise_on_status=False)
        self.session.mount("http://", HTTPAdapter(max_retries=retries))
        self.session.mount("https://", HTTPAdapter(max_retries=retries))
        self.timeout = timeout

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        """Close the HTTP session."""
        self.session.close()

    @property
    def address(self) -> str:
        """
        Get the signer address

        Raises:
            SignerUnavailableError: If no signer is configured
        """
        return self._require_signer().get_address()

    @property
    def safe_address(self) -> str:
        """Counterfactual Safe address of the configured signer."""
        return derive_safe(self.address, self.contract_config.safe_contracts.safe_factory)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_nonce(self, signer_address: str, signer_type: str = TransactionType.SAFE.value) -> str:
        """
        Get the relayer's current nonce for an address.

        Args:
            signer_address: Signer (owner) address
            signer_type: Nonce kind, "SAFE" by default

        Returns:
            Nonce as a decimal string
        """
        payload = self._send(GET_NONCE, "GET", params={"address": signer_address, "type": signer_type})
        return NoncePayload.model_validate(payload).nonce

    def get_transaction(self, transaction_id: str) -> List[RelayerTransaction]:
        """
        Get a relayer transaction by id.

        Returns:
            List with zero or one record
        """
        payload = self._send(GET_TRANSACTION, "GET", params={"id": transaction_id})
        return [RelayerTransaction.model_validate(item) for item in payload or []]

    def get_transactions(self) -> List[RelayerTransaction]:
        """Get all transactions visible to the authenticated caller."""
        payload = self._send_authed_request("GET", GET_TRANSACTIONS)
        return [RelayerTransaction.model_validate(item) for item in payload or []]

    def get_deployed(self, safe_address: str) -> bool:
        """
        Check whether a Safe is deployed, as reported by the relayer.

        Args:
            safe_address: Safe address to check

        Returns:
            True if deployed
        """
        payload = self._send(GET_DEPLOYED, "GET", params={"address": safe_address})
        return GetDeployedResponse.model_validate(payload).deployed

    is_deployed = get_deployed

    # ------------------------------------------------------------------
    # Submissions
    # ------------------------------------------------------------------

    def submit_batch(self, transactions: Iterable[SafeTransaction], metadata: Optional[str] = None) -> PendingTransaction:
        """
        Sign and submit calls to be executed by the signer's Safe.

        Multiple calls are batched through MultiSend. One nonce lookup and one
        submission are made per call; failures are not retried.

        Args:
            transactions: Calls to execute, in order
            metadata: Optional metadata stored by the relayer

        Returns:
            PendingTransaction handle

        Raises:
            SignerUnavailableError: If no signer is configured
            AccountNotDeployedError: If the Safe has not been deployed
            ValueError: If no transactions are given
            requests.HTTPError: If the relayer rejects a request
        """
        signer = self._require_signer()
        txns = list(transactions)
        if not txns:
            raise ValueError("At least one transaction is required")

        start = time.monotonic()
        from_address = signer.get_address()
        safe_contracts = self.contract_config.safe_contracts
        safe_address = derive_safe(from_address, safe_contracts.safe_factory)

        if not self.get_deployed(safe_address):
            self.logger.error(f"Safe {safe_address} is not deployed")
            raise AccountNotDeployedError()

        nonce = self.get_nonce(from_address, TransactionType.SAFE.value)

        args = SafeTransactionArgs(
            from_address=from_address,
            nonce=nonce,
            chain_id=self.chain_id,
            transactions=txns,
        )
        request = build_safe_transaction_request(signer, args, safe_contracts, metadata)
        self.logger.debug(f"Client side safe request creation took: {time.monotonic() - start:.3f} seconds")
        return self._submit(request.model_dump(by_alias=True, exclude_none=True))

    def deploy_account(self) -> PendingTransaction:
        """
        Deploy the signer's Safe through the relayer.

        Returns:
            PendingTransaction handle

        Raises:
            SignerUnavailableError: If no signer is configured
            AccountAlreadyDeployedError: If the Safe already exists
            requests.HTTPError: If the relayer rejects a request
        """
        signer = self._require_signer()

        start = time.monotonic()
        from_address = signer.get_address()
        safe_contracts = self.contract_config.safe_contracts
        safe_address = derive_safe(from_address, safe_contracts.safe_factory)

        if self.get_deployed(safe_address):
            self.logger.error(f"Safe {safe_address} is already deployed")
            raise AccountAlreadyDeployedError()

        args = SafeCreateTransactionArgs(
            from_address=from_address,
            chain_id=self.chain_id,
            payment_token=ZERO_ADDRESS,
            payment="0",
            payment_receiver=ZERO_ADDRESS,
        )
        request = build_safe_create_transaction_request(signer, safe_contracts, args)
        self.logger.debug(f"Client side deploy request creation took: {time.monotonic() - start:.3f} seconds")
        return self._submit(request.model_dump(by_alias=True, exclude_none=True))

    # ------------------------------------------------------------------
    # Polling
    # ------------------------------------------------------------------

    def poll_until_state(
        self,
        transaction_id: str,
        states: Iterable[str],
        fail_state: Optional[str] = None,
        max_polls: Optional[int] = None,
        poll_frequency: Optional[float] = None,
    ) -> Optional[RelayerTransaction]:
        """
        Poll a transaction until it reaches one of the given states.

        A missing record counts as a non-matching poll.

        Args:
            transaction_id: Relayer transaction id
            states: Target states
            fail_state: State that ends polling unsuccessfully (optional)
            max_polls: Maximum number of polls (default=10)
            poll_frequency: Seconds between polls (default=2.0, values below 1.0 use the default)

        Returns:
            The matching record, or None on failure or timeout
        """
        targets = {str(getattr(s, "value", s)) for s in states}
        fail = getattr(fail_state, "value", fail_state)
        max_poll_count = max_polls if max_polls is not None else DEFAULT_MAX_POLLS
        frequency = DEFAULT_POLL_FREQUENCY
        if poll_frequency is not None and poll_frequency >= MIN_POLL_FREQUENCY:
            frequency = poll_frequency

        self.logger.info(f"Waiting for transaction {transaction_id} matching states: {sorted(targets)}...")
        poll_count = 0
        while poll_count < max_poll_count:
            txns = self.get_transaction(transaction_id)
            if txns:
                txn = txns[0]
                if txn.state in targets:
                    self.logger.info(f"Transaction {transaction_id} reached {txn.state}")
                    return txn
                if fail is not None and txn.state == fail:
                    self.logger.warning(f"Transaction {transaction_id} reached fail state {txn.state}")
                    return None
            poll_count += 1
            time.sleep(frequency)

        self.logger.warning(f"Transaction {transaction_id} not found or not in given states, timing out")
        return None

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _require_signer(self) -> Signer:
        if self.signer is None:
            raise SignerUnavailableError()
        return self.signer

    def _submit(self, request: Dict[str, Any]) -> PendingTransaction:
        self.logger.debug(f"Submitting request: {self._sanitize_request(request)}")
        body = json.dumps(request)
        payload = self._send_authed_request("POST", SUBMIT_TRANSACTION, body)
        resp = SubmitTransactionResponse.model_validate(payload)
        self.logger.info(f"Relayer accepted {request['type']} transaction {resp.transaction_id} ({resp.state})")
        return PendingTransaction(resp.transaction_id, resp.state, resp.transaction_hash, self)

    def _send_authed_request(self, method: str, path: str, body: Optional[str] = None) -> Any:
        """
        Send a request decorated with builder headers when available.

        If the authenticator is missing, invalid or declines, the request is
        sent without authentication headers.
        """
        if self.authenticator is not None and self.authenticator.is_valid():
            headers = self.authenticator.generate_builder_headers(method, path, body)
            if headers:
                return self._send(path, method, headers=headers, data=body)
        return self._send(path, method, data=body)

    def _send(
        self,
        endpoint: str,
        method: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        data: Optional[str] = None,
    ) -> Any:
        request_headers = {"Content-Type": "application/json"} if data is not None else {}
        request_headers.update(headers or {})
        response = self.session.request(
            method,
            f"{self.relayer_url}{endpoint}",
            params=params,
            headers=request_headers,
            data=data,
            timeout=self.timeout,
        )
        if response.status_code >= 400:
            self.logger.error(f"Relayer {method} {endpoint} failed: {response.status_code} {response.text[:200]}")
        response.raise_for_status()
        return response.json()

    def _sanitize_request(self, request: Dict[str, Any]) -> Dict[str, Any]:
        """Redact the signature from a request for safe logging."""
        result = request.copy()
        if "signature" in result:
            result["signature"] = f"[REDACTED - {len(str(result['signature']))} chars]"
        return result
