#!/usr/bin/env python3
"""
Example of executing a gasless Safe transaction through the relayer.
"""
import logging
import os

from eth_abi import encode
from eth_utils import function_signature_to_4byte_selector

from relayer_sdk import (
    AccountAlreadyDeployedError,
    OperationType,
    RelayClient,
    RelayerTransactionState,
    SafeTransaction,
)

USDC = "0x2791Bca1f2de4661ED88A30C99A7a9449Aa84174"
CTF = "0x4D97DCd97eC945f40cF65F87097ACe5EA0476045"
MAX_UINT256 = 2**256 - 1


def create_usdc_approve_txn(token: str, spender: str) -> SafeTransaction:
    selector = function_signature_to_4byte_selector("approve(address,uint256)")
    data = selector + encode(["address", "uint256"], [spender, MAX_UINT256])
    return SafeTransaction(
        to=token,
        operation=OperationType.Call,
        data="0x" + data.hex(),
        value="0",
    )


def main():
    """
    Demonstrate basic usage of the RelayClient.

    This example shows how to:
    1. Initialize the client
    2. Deploy the signer's Safe if needed
    3. Submit an approval and wait for it to be mined
    """
    logging.basicConfig(level=logging.INFO)

    # Read configuration from environment
    RELAYER_URL = os.environ.get("RELAYER_URL", "https://relayer-v2.polymarket.com")
    CHAIN_ID = int(os.environ.get("CHAIN_ID", "137"))
    PRIVATE_KEY = os.environ.get("SAFE_PK")

    if not PRIVATE_KEY:
        print("ERROR: SAFE_PK environment variable is required")
        return

    with RelayClient(RELAYER_URL, CHAIN_ID, priv_key=PRIVATE_KEY) as client:
        print(f"Signer: {client.address}")
        print(f"Safe:   {client.safe_address}")

        try:
            deployment = client.deploy_account()
            deployed = deployment.wait()
            if deployed is None:
                print("Safe deployment did not complete")
                return
            print(f"Safe deployed in {deployed.transaction_hash}")
        except AccountAlreadyDeployedError:
            print("Safe already deployed")

        pending = client.submit_batch([create_usdc_approve_txn(USDC, CTF)], metadata="approve USDC on CTF")
        print(f"Submitted {pending.transaction_id} ({pending.state})")

        result = client.poll_until_state(
            pending.transaction_id,
            [RelayerTransactionState.STATE_MINED, RelayerTransactionState.STATE_CONFIRMED],
            RelayerTransactionState.STATE_FAILED,
            max_polls=30,
            poll_frequency=2,
        )
        if result is None:
            print("Transaction failed or timed out")
        else:
            print(f"Transaction {result.state}: {result.transaction_hash}")


if __name__ == "__main__":
    main()
