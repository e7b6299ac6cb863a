"""
Request builders for the Safe relayer.
"""
from .create import build_safe_create_transaction_request
from .derive import derive_proxy_wallet, derive_safe
from .safe import aggregate_transaction, build_safe_transaction_request

__all__ = [
    'aggregate_transaction',
    'build_safe_create_transaction_request',
    'build_safe_transaction_request',
    'derive_proxy_wallet',
    'derive_safe',
]
