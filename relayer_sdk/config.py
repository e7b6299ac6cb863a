"""
Static contract configuration for supported networks.

The table is built once at import time and exposed read-only; clients
receive their ContractConfig explicitly instead of reaching into it.
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from .exceptions import UnsupportedNetworkError

POLYGON_CHAIN_ID = 137
AMOY_CHAIN_ID = 80002


@dataclass(frozen=True)
class ProxyContractConfig:
    """Addresses used by the legacy proxy wallet flow."""
    relay_hub: str
    proxy_factory: str


@dataclass(frozen=True)
class SafeContractConfig:
    """Addresses used by the Safe flow."""
    safe_factory: str
    safe_multisend: str


@dataclass(frozen=True)
class ContractConfig:
    """All contract addresses for one chain."""
    proxy_contracts: ProxyContractConfig
    safe_contracts: SafeContractConfig


_AMOY = ContractConfig(
    # Proxy factory unsupported on Amoy testnet
    proxy_contracts=ProxyContractConfig(relay_hub="", proxy_factory=""),
    safe_contracts=SafeContractConfig(
        safe_factory="0xaacFeEa03eb1561C4e67d661e40682Bd20E3541b",
        safe_multisend="0xA238CBeb142c10Ef7Ad8442C6D1f9E89e07e7761",
    ),
)

_POLYGON = ContractConfig(
    proxy_contracts=ProxyContractConfig(
        relay_hub="0xD216153c06E857cD7f72665E0aF1d7D82172F494",
        proxy_factory="0xaB45c5A4B0c941a2F231C04C3f49182e1A254052",
    ),
    safe_contracts=SafeContractConfig(
        safe_factory="0xaacFeEa03eb1561C4e67d661e40682Bd20E3541b",
        safe_multisend="0xA238CBeb142c10Ef7Ad8442C6D1f9E89e07e7761",
    ),
)

CONTRACT_CONFIGS: Mapping[int, ContractConfig] = MappingProxyType({
    POLYGON_CHAIN_ID: _POLYGON,
    AMOY_CHAIN_ID: _AMOY,
})


def get_contract_config(chain_id: int) -> ContractConfig:
    """
    Look up the contract configuration for a chain.

    Args:
        chain_id: EIP-155 chain id

    Returns:
        ContractConfig for the chain

    Raises:
        UnsupportedNetworkError: If the chain id is not in the table
    """
    try:
        return CONTRACT_CONFIGS[chain_id]
    except KeyError:
        raise UnsupportedNetworkError(chain_id) from None
