"""
Handle for a transaction accepted by the relayer.
"""
from typing import TYPE_CHECKING, List, Optional

from .models import RelayerTransaction, RelayerTransactionState

if TYPE_CHECKING:
    from .client import RelayClient


class PendingTransaction:
    """
    Result of a submission, bound to the client that made it.

    Attributes:
        transaction_id: Relayer transaction id
        state: State reported at submission time
        transaction_hash: On-chain hash, if already known
        hash: Alias of transaction_hash
    """

    def __init__(self, transaction_id: str, state: str, transaction_hash: Optional[str], client: "RelayClient"):
        self.transaction_id = transaction_id
        self.state = state
        self.transaction_hash = transaction_hash
        self.client = client

    @property
    def hash(self) -> Optional[str]:
        """Alias of transaction_hash"""
        return self.transaction_hash

    def __repr__(self) -> str:
        return (
            f"PendingTransaction(transaction_id={self.transaction_id!r}, "
            f"state={self.state!r}, transaction_hash={self.transaction_hash!r})"
        )

    def get_transaction(self) -> List[RelayerTransaction]:
        """Fetch the current relayer record(s) for this transaction."""
        return self.client.get_transaction(self.transaction_id)

    def wait(self) -> Optional[RelayerTransaction]:
        """
        Block until the transaction is mined or confirmed.

        Polls up to 30 times at the default frequency.

        Returns:
            The relayer record, or None if it failed or polling timed out
        """
        return self.client.poll_until_state(
            self.transaction_id,
            [
                RelayerTransactionState.STATE_MINED.value,
                RelayerTransactionState.STATE_CONFIRMED.value,
            ],
            RelayerTransactionState.STATE_FAILED.value,
            30,
        )
