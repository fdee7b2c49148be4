#!/usr/bin/env python3
"""
Example of classifying a decoded Safe transaction.
"""
import os

from safe_wallet_sdk import (
    DecodedCallData,
    RawTransaction,
    TxDetailsClient,
    TxDetailsState,
    classify_transaction,
)

MULTISEND_CALL_ONLY = "0x40A2aCCbd92BCA938b02010E17A5b8929b49130D"


def describe(model):
    kind = "multisend" if model.is_multisend else "native transfer" if model.is_native_transfer else "call"
    target = model.to_info.name or model.to_info.value
    print(f"  kind: {kind} ({model.operation.name})")
    print(f"  target: {target}")
    print(f"  details: {model.details_status.value}")
    if model.is_delegate_call and not model.trusted_delegate_call_target:
        print("  WARNING: delegatecall to an untrusted contract")


def main():
    """
    Demonstrate usage of classify_transaction.

    This example shows how to:
    1. Classify a transaction before its details are known
    2. Load the details from the client gateway
    3. Classify it again with the details
    """
    CHAIN_ID = os.environ.get("CHAIN_ID", "1")
    TX_ID = os.environ.get("SAFE_TX_ID")

    tx = RawTransaction(to=MULTISEND_CALL_ONLY, value=0, operation=1, data="0x8d80ff0a")
    decoded = DecodedCallData.model_validate({
        "method": "multiSend",
        "parameters": [{
            "name": "transactions",
            "type": "bytes",
            "value": "0x",
            "valueDecoded": [
                {"operation": 0, "to": "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045", "value": "1000"},
            ],
        }],
    })

    print("Before details:")
    describe(classify_transaction(tx, decoded, TxDetailsState.loading()))

    if not TX_ID:
        print("Set SAFE_TX_ID to load transaction details from the gateway")
        return

    client = TxDetailsClient()
    state = client.load(CHAIN_ID, TX_ID)
    if state.is_errored:
        print(f"Failed loading all transaction details: {state.error}")

    print("After details:")
    describe(classify_transaction(tx, decoded, state))


if __name__ == "__main__":
    main()
