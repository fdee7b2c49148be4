"""
Transactions module for the Safe Wallet SDK.

Classifies decoded Safe transactions (call, delegatecall, multisend batch,
native transfer) and loads their details from the client gateway.
"""
from .classifier import (
    DecodePresentationModel,
    classify_transaction,
    get_operation,
    is_multisend_call,
    is_native_transfer,
)
from .details import TxDetailsClient
from .types import (
    AddressInfo,
    CustomTxInfo,
    DecodedCallData,
    DecodedInnerCall,
    DecodedParameter,
    DetailsStatus,
    GenericTxInfo,
    Operation,
    RawTransaction,
    TxData,
    TxDetails,
    TxDetailsState,
    is_custom_tx_info,
)

__all__ = [
    'classify_transaction', 'DecodePresentationModel', 'get_operation',
    'is_multisend_call', 'is_native_transfer', 'TxDetailsClient',
    'Operation', 'RawTransaction', 'DecodedCallData', 'DecodedParameter',
    'DecodedInnerCall', 'AddressInfo', 'TxData', 'TxDetails', 'TxDetailsState',
    'DetailsStatus', 'CustomTxInfo', 'GenericTxInfo', 'is_custom_tx_info',
]
