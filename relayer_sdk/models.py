"""
Data models for the Safe relayer SDK.
"""
from datetime import datetime
from enum import Enum, IntEnum
from typing import Annotated, List, Literal, Optional, Union

from eth_utils import is_address, is_hexstr, to_checksum_address
from pydantic import BaseModel, ConfigDict, Field, field_validator


class OperationType(IntEnum):
    """Safe operation byte"""
    Call = 0
    DelegateCall = 1


class TransactionType(str, Enum):
    """Request types understood by the relayer"""
    SAFE = "SAFE"
    SAFE_CREATE = "SAFE-CREATE"
    # Only seen on records returned by the relayer
    PROXY = "PROXY"


class RelayerTransactionState(str, Enum):
    """Lifecycle states reported by the relayer"""
    STATE_NEW = "STATE_NEW"
    STATE_EXECUTED = "STATE_EXECUTED"
    STATE_MINED = "STATE_MINED"
    STATE_INVALID = "STATE_INVALID"
    STATE_CONFIRMED = "STATE_CONFIRMED"
    STATE_FAILED = "STATE_FAILED"


class SafeTransaction(BaseModel):
    """A single call executed by a Safe"""
    model_config = ConfigDict(frozen=True)

    to: str
    operation: OperationType = OperationType.Call
    data: str = "0x"
    value: str = "0"

    @field_validator("to")
    @classmethod
    def _checksum_to(cls, v: str) -> str:
        if not is_address(v):
            raise ValueError(f"Invalid address: {v}")
        return to_checksum_address(v)

    @field_validator("data")
    @classmethod
    def _check_data(cls, v: str) -> str:
        if not v.startswith("0x") or (v != "0x" and not is_hexstr(v)):
            raise ValueError(f"data must be a 0x-prefixed hex string, got: {v[:20]}")
        return v

    @field_validator("value", mode="before")
    @classmethod
    def _value_to_str(cls, v: Union[int, str]) -> str:
        if isinstance(v, bool) or not isinstance(v, (int, str)):
            raise ValueError(f"value must be an integer or integer string, got: {v!r}")
        if isinstance(v, str):
            text = v.strip()
            try:
                value = int(text, 16) if text.startswith(("0x", "0X")) else int(text, 10)
            except ValueError:
                raise ValueError(f"value must be an integer or integer string, got: {v!r}") from None
        else:
            value = v
        if value < 0:
            raise ValueError("value must be non-negative")
        return str(value)


class SafeTransactionArgs(BaseModel):
    """Inputs for building a SAFE request"""
    model_config = ConfigDict(populate_by_name=True)

    from_address: str = Field(..., alias="from")
    nonce: str
    chain_id: int = Field(..., alias="chainId")
    transactions: List[SafeTransaction]


class SafeCreateTransactionArgs(BaseModel):
    """Inputs for building a SAFE-CREATE request"""
    model_config = ConfigDict(populate_by_name=True)

    from_address: str = Field(..., alias="from")
    chain_id: int = Field(..., alias="chainId")
    payment_token: str = Field(..., alias="paymentToken")
    payment: str
    payment_receiver: str = Field(..., alias="paymentReceiver")


class SafeSignatureParams(BaseModel):
    """Unhashed SafeTx parameters the relayer needs to rebuild the hash"""
    model_config = ConfigDict(populate_by_name=True)

    gas_price: str = Field(..., alias="gasPrice")
    operation: str
    safe_txn_gas: str = Field(..., alias="safeTxnGas")
    base_gas: str = Field(..., alias="baseGas")
    gas_token: str = Field(..., alias="gasToken")
    refund_receiver: str = Field(..., alias="refundReceiver")


class SafeCreateSignatureParams(BaseModel):
    """CreateProxy payment parameters"""
    model_config = ConfigDict(populate_by_name=True)

    payment_token: str = Field(..., alias="paymentToken")
    payment: str
    payment_receiver: str = Field(..., alias="paymentReceiver")


class SafeTransactionRequest(BaseModel):
    """Signed SAFE request submitted to the relayer"""
    model_config = ConfigDict(populate_by_name=True)

    type: Literal["SAFE"] = TransactionType.SAFE.value
    from_address: str = Field(..., alias="from")
    to: str
    proxy_wallet: str = Field(..., alias="proxyWallet")
    data: str
    nonce: str
    signature: str
    signature_params: SafeSignatureParams = Field(..., alias="signatureParams")
    metadata: str = ""


class SafeCreateTransactionRequest(BaseModel):
    """Signed SAFE-CREATE request submitted to the relayer"""
    model_config = ConfigDict(populate_by_name=True)

    type: Literal["SAFE-CREATE"] = TransactionType.SAFE_CREATE.value
    from_address: str = Field(..., alias="from")
    to: str
    proxy_wallet: str = Field(..., alias="proxyWallet")
    data: str = "0x"
    signature: str
    signature_params: SafeCreateSignatureParams = Field(..., alias="signatureParams")


TransactionRequest = Annotated[
    Union[SafeTransactionRequest, SafeCreateTransactionRequest],
    Field(discriminator="type"),
]


class NoncePayload(BaseModel):
    """Response of the nonce endpoint"""
    nonce: str

    @field_validator("nonce", mode="before")
    @classmethod
    def _nonce_to_str(cls, v: Union[int, str]) -> str:
        return str(v)


class GetDeployedResponse(BaseModel):
    """Response of the deployed endpoint"""
    deployed: bool


class SubmitTransactionResponse(BaseModel):
    """Immediate response of the submit endpoint"""
    model_config = ConfigDict(populate_by_name=True)

    transaction_id: str = Field(..., alias="transactionID")
    state: str
    transaction_hash: Optional[str] = Field(None, alias="transactionHash")


class RelayerTransaction(BaseModel):
    """Transaction record owned by the relayer"""
    model_config = ConfigDict(populate_by_name=True)

    transaction_id: str = Field(..., alias="transactionID")
    transaction_hash: Optional[str] = Field(None, alias="transactionHash")
    from_address: Optional[str] = Field(None, alias="from")
    to: Optional[str] = None
    proxy_address: Optional[str] = Field(None, alias="proxyAddress")
    data: Optional[str] = None
    nonce: Optional[str] = None
    value: Optional[str] = None
    state: str
    type: Optional[str] = None
    metadata: Optional[str] = None
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    @field_validator("nonce", "value", mode="before")
    @classmethod
    def _int_to_str(cls, v):
        return None if v is None else str(v)
