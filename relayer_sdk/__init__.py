"""
Safe relayer SDK.

Builds, signs and submits gasless Safe transactions through a relayer.
"""
from .auth import BuilderAuthenticator
from .builder import (
    aggregate_transaction,
    build_safe_create_transaction_request,
    build_safe_transaction_request,
    derive_proxy_wallet,
    derive_safe,
)
from .client import RelayClient
from .config import ContractConfig, ProxyContractConfig, SafeContractConfig, get_contract_config
from .exceptions import (
    AccountAlreadyDeployedError,
    AccountNotDeployedError,
    InvalidSignatureFormatError,
    RelayerClientError,
    SignerUnavailableError,
    UnsupportedNetworkError,
)
from .models import (
    OperationType,
    RelayerTransaction,
    RelayerTransactionState,
    SafeCreateTransactionRequest,
    SafeTransaction,
    SafeTransactionRequest,
    TransactionRequest,
    TransactionType,
)
from .response import PendingTransaction
from .signer import KeySigner, LocalSigner, Signer, Web3Signer, create_signer
from .utils import split_and_pack_sig
from .version import __version__

__all__ = [
    "RelayClient",
    "PendingTransaction",
    "BuilderAuthenticator",
    "Signer",
    "LocalSigner",
    "KeySigner",
    "Web3Signer",
    "create_signer",
    "ContractConfig",
    "ProxyContractConfig",
    "SafeContractConfig",
    "get_contract_config",
    "OperationType",
    "RelayerTransaction",
    "RelayerTransactionState",
    "SafeTransaction",
    "SafeTransactionRequest",
    "SafeCreateTransactionRequest",
    "TransactionRequest",
    "TransactionType",
    "aggregate_transaction",
    "build_safe_transaction_request",
    "build_safe_create_transaction_request",
    "derive_safe",
    "derive_proxy_wallet",
    "split_and_pack_sig",
    "RelayerClientError",
    "SignerUnavailableError",
    "AccountAlreadyDeployedError",
    "AccountNotDeployedError",
    "InvalidSignatureFormatError",
    "UnsupportedNetworkError",
    "__version__",
]
