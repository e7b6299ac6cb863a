"""
Exceptions for the Safe relayer SDK.
"""


class RelayerClientError(Exception):
    """Base exception for relayer client errors."""
    pass


class SignerUnavailableError(RelayerClientError):
    """Raised when a signing operation is attempted without a signer."""

    def __init__(self, message: str = "signer is needed to interact with this endpoint!"):
        super().__init__(message)


class AccountAlreadyDeployedError(RelayerClientError):
    """Raised when deploying a Safe that already exists on-chain."""

    def __init__(self, message: str = "safe already deployed!"):
        super().__init__(message)


class AccountNotDeployedError(RelayerClientError):
    """Raised when submitting transactions for a Safe that is not deployed."""

    def __init__(self, message: str = "safe not deployed!"):
        super().__init__(message)


class InvalidSignatureFormatError(RelayerClientError):
    """Raised when a raw signature cannot be packed into the Safe layout."""
    pass


class UnsupportedNetworkError(RelayerClientError):
    """Raised when no contract configuration exists for a chain id."""

    def __init__(self, chain_id: int):
        self.chain_id = chain_id
        super().__init__(f"Invalid network: unsupported chain id {chain_id}")
