"""
Pytest fixtures for the Safe Wallet SDK tests.
"""
import pytest

from safe_wallet_sdk._rate_limited_log import reset_rate_limited_log
from safe_wallet_sdk.transactions import DecodedCallData, RawTransaction, TxDetails

# Constants for testing
TEST_APP_URL = "https://app.example"
TEST_CHAIN_ID = "1"
TEST_GATEWAY_URL = "https://gateway.example.com"
TEST_SAFE = "0x1234567890123456789012345678901234567890"
TEST_MULTISEND = "0x40A2aCCbd92BCA938b02010E17A5b8929b49130D"
# Vitalik's address, lowercase on purpose to exercise checksumming
TEST_TARGET_LOWER = "0xd8da6bf26964af9d7eed9e03e53415d37aa96045"
TEST_TARGET = "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"
TEST_TX_ID = f"multisig_{TEST_SAFE}_0x" + "ab" * 32

PAGE_WITHOUT_MANIFEST = "<html><head><title>App</title></head><body></body></html>"
PAGE_WITH_MANIFEST = (
    '<html><head><title>App</title>'
    '<link rel="icon" href="/favicon.ico">'
    '<link rel="manifest" href="/app-manifest.json">'
    '</head><body></body></html>'
)


@pytest.fixture(autouse=True)
def _reset_rate_limited_log():
    """Suppressed messages must not leak between tests."""
    reset_rate_limited_log()
    yield
    reset_rate_limited_log()


@pytest.fixture
def manifest_json():
    """A complete, valid Safe App manifest"""
    return {
        "name": "Transaction Builder",
        "short_name": "Tx Builder",
        "description": "Compose custom contract interactions",
        "icons": [
            {"src": "icon-64.png", "sizes": "64x64", "type": "image/png"},
            {"src": "/icon-256.png", "sizes": "256x256", "type": "image/png"},
        ],
        "safe_apps_permissions": ["camera", "clipboard-write"],
    }


@pytest.fixture
def call_tx():
    return RawTransaction(to=TEST_TARGET_LOWER, value=0, operation=0, data="0xa9059cbb")


@pytest.fixture
def transfer_tx():
    return RawTransaction(to=TEST_TARGET_LOWER, value="1000000000000000000", operation=0)


@pytest.fixture
def multisend_tx():
    return RawTransaction(to=TEST_MULTISEND, value=0, operation=1, data="0x8d80ff0a")


@pytest.fixture
def transfer_decoded():
    return DecodedCallData.model_validate({
        "method": "transfer",
        "parameters": [
            {"name": "to", "type": "address", "value": TEST_SAFE},
            {"name": "value", "type": "uint256", "value": "1000"},
        ],
    })


@pytest.fixture
def multisend_decoded():
    return DecodedCallData.model_validate({
        "method": "multiSend",
        "parameters": [
            {
                "name": "transactions",
                "type": "bytes",
                "value": "0x00",
                "valueDecoded": [
                    {
                        "operation": 0,
                        "to": TEST_TARGET,
                        "value": "0",
                        "data": "0xa9059cbb",
                        "dataDecoded": {
                            "method": "transfer",
                            "parameters": [
                                {"name": "to", "type": "address", "value": TEST_SAFE},
                                {"name": "value", "type": "uint256", "value": "1"},
                            ],
                        },
                    },
                    {"operation": 0, "to": TEST_SAFE, "value": "5", "data": None, "dataDecoded": None},
                ],
            }
        ],
    })


@pytest.fixture
def custom_details_json():
    """Gateway transaction details for a call to a known contract"""
    return {
        "txId": TEST_TX_ID,
        "safeAddress": TEST_SAFE,
        "txStatus": "AWAITING_CONFIRMATIONS",
        "txInfo": {
            "type": "Custom",
            "to": {
                "value": TEST_MULTISEND,
                "name": "Safe: MultiSendCallOnly 1.3.0",
                "logoUri": "https://assets.example.com/multisend.png",
            },
            "dataSize": "324",
            "value": "0",
            "methodName": "multiSend",
            "actionCount": 2,
            "isCancellation": False,
        },
        "txData": {
            "hexData": "0x8d80ff0a",
            "dataDecoded": {"method": "multiSend", "parameters": []},
            "to": {"value": TEST_MULTISEND, "name": "Safe: MultiSendCallOnly 1.3.0"},
            "value": "0",
            "operation": 1,
            "trustedDelegateCallTarget": False,
            "addressInfoIndex": {
                TEST_TARGET: {"value": TEST_TARGET, "name": "vitalik.eth"},
            },
        },
        "txHash": None,
    }


@pytest.fixture
def custom_details(custom_details_json):
    return TxDetails.model_validate(custom_details_json)


@pytest.fixture
def transfer_details_json():
    """Gateway transaction details for a plain native transfer"""
    return {
        "txId": TEST_TX_ID,
        "safeAddress": TEST_SAFE,
        "txStatus": "SUCCESS",
        "txInfo": {
            "type": "Transfer",
            "sender": {"value": TEST_SAFE},
            "recipient": {"value": TEST_TARGET},
            "direction": "OUTGOING",
        },
        "txData": {
            "hexData": None,
            "dataDecoded": None,
            "to": {"value": TEST_TARGET},
            "value": "1000000000000000000",
            "operation": 0,
            "trustedDelegateCallTarget": None,
        },
    }
