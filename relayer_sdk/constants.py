"""
Protocol constants for the Safe relayer SDK.
"""

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# keccak256 of the Safe proxy creation code deployed by the Safe factory
SAFE_INIT_CODE_HASH = "0x2bce2127ff07fb632d16c8347c4ebf501f4841168bed00d9e6ef715ddb6fcecf"

# keccak256 of the legacy proxy wallet creation code
PROXY_INIT_CODE_HASH = "0xd21df8dc65880a8606f09fe0ce3df9b8869287ab0b058be05aa9e8af6330a00b"

# EIP-712 domain name of the Safe factory
SAFE_FACTORY_NAME = "Polymarket Contract Proxy Factory"

# Relayer endpoints
GET_NONCE = "/nonce"
GET_TRANSACTION = "/transaction"
GET_TRANSACTIONS = "/transactions"
GET_DEPLOYED = "/deployed"
SUBMIT_TRANSACTION = "/submit"
