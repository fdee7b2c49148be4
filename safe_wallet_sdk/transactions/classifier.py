"""
Classification of decoded Safe transactions for display.

Everything here is pure: given the same transaction, decoded data and
details snapshot, the same DecodePresentationModel comes out. Missing or
pending inputs never raise, they fall back to the least informative safe
output (raw target, trusted target, no multisend).
"""
from typing import Dict, Optional, Union

from pydantic import BaseModel, ConfigDict

from .types import (
    DELEGATE_CALL_CODE,
    AddressInfo,
    CustomTxInfo,
    DecodedCallData,
    DetailsStatus,
    Operation,
    RawTransaction,
    TxData,
    TxDetails,
    TxDetailsState,
)

NATIVE_TRANSFER_LABEL = "native transfer"

# Assumed while details are missing so loading never shows a delegatecall warning
DEFAULT_TRUSTED_DELEGATE_CALL_TARGET = True


def get_operation(code: int) -> Operation:
    """Map a raw operation code to its kind; anything but delegatecall is a call."""
    if code == DELEGATE_CALL_CODE:
        return Operation.DELEGATE
    return Operation.CALL


def is_multisend_call(decoded_data: Optional[DecodedCallData]) -> bool:
    """
    True if the call batches further calls.

    Only the shape counts: the first parameter must carry a non-empty list
    of nested calls. The method name is deliberately not consulted.
    """
    if decoded_data is None or not decoded_data.parameters:
        return False
    return decoded_data.parameters[0].has_nested_calls


def is_native_transfer(decoded_data: Optional[DecodedCallData], value: int) -> bool:
    """A transfer of native currency without any method call."""
    has_method = decoded_data is not None and bool(decoded_data.method)
    return not has_method and value > 0


def as_details_state(details: Union[TxDetails, TxDetailsState, None]) -> TxDetailsState:
    if details is None:
        return TxDetailsState.idle()
    if isinstance(details, TxDetails):
        return TxDetailsState.loaded(details)
    return details


def resolve_trusted_delegate_call_target(state: TxDetailsState) -> bool:
    if not state.is_loaded:
        return DEFAULT_TRUSTED_DELEGATE_CALL_TARGET
    tx_data = state.details.tx_data
    if tx_data is None or tx_data.trusted_delegate_call_target is None:
        return DEFAULT_TRUSTED_DELEGATE_CALL_TARGET
    return tx_data.trusted_delegate_call_target


def resolve_address_info_index(state: TxDetailsState) -> Optional[Dict[str, AddressInfo]]:
    if not state.is_loaded or state.details.tx_data is None:
        return None
    return state.details.tx_data.address_info_index


def resolve_to_info(tx: RawTransaction, state: TxDetailsState) -> AddressInfo:
    """
    The target to display: the custom contract identity once details say so,
    otherwise the bare target address.
    """
    if state.is_loaded and isinstance(state.details.tx_info, CustomTxInfo):
        return state.details.tx_info.to
    return AddressInfo(value=tx.to)


class DecodePresentationModel(BaseModel):
    """Everything a view needs to render a decoded transaction"""
    model_config = ConfigDict(frozen=True)

    decoded_data: Optional[DecodedCallData] = None
    to: AddressInfo
    to_info: AddressInfo
    value: int
    operation: Operation
    trusted_delegate_call_target: bool = DEFAULT_TRUSTED_DELEGATE_CALL_TARGET
    address_info_index: Optional[Dict[str, AddressInfo]] = None

    is_multisend: bool = False
    is_native_transfer: bool = False
    is_method_call_in_advanced: bool = True
    advanced_summary_label: Optional[str] = None
    multisend_tx_data: Optional[TxData] = None

    details_status: DetailsStatus = DetailsStatus.IDLE
    details_error: Optional[str] = None
    show_full_summary: bool = False

    @property
    def is_delegate_call(self) -> bool:
        return self.operation == Operation.DELEGATE

    @property
    def is_details_loading(self) -> bool:
        return self.details_status == DetailsStatus.LOADING

    @property
    def is_details_errored(self) -> bool:
        return self.details_status == DetailsStatus.ERRORED

    @property
    def method(self) -> Optional[str]:
        return self.decoded_data.method if self.decoded_data else None

    def to_tx_data(self, hex_data: Optional[str] = None) -> TxData:
        """The locally known transaction data, shaped like gateway tx data"""
        return TxData(
            hex_data=hex_data,
            data_decoded=self.decoded_data,
            to=self.to,
            value=self.value,
            operation=self.operation,
            trusted_delegate_call_target=self.trusted_delegate_call_target,
            address_info_index=self.address_info_index
        )


def _advanced_summary_label(
    decoded_data: Optional[DecodedCallData],
    method_call_in_advanced: bool,
    native_transfer: bool,
    show_method_call: bool
) -> Optional[str]:
    if method_call_in_advanced and decoded_data is not None and decoded_data.method:
        return decoded_data.method
    if not show_method_call and native_transfer:
        return NATIVE_TRANSFER_LABEL
    return None


def classify_transaction(
    tx: RawTransaction,
    decoded_data: Optional[DecodedCallData] = None,
    details: Union[TxDetails, TxDetailsState, None] = None,
    show_multisend: bool = True,
    show_method_call: bool = False
) -> DecodePresentationModel:
    """
    Derive the presentation model of a transaction

    Can be called before the details arrive and again afterwards; the later
    result only adds information to the earlier one.

    Args:
        tx: The raw transaction
        decoded_data: Decoded call data, if the call could be decoded
        details: Gateway details, or a snapshot of their lookup
        show_multisend: Whether the view lists multisend batches
        show_method_call: Whether the method call is shown outside the
            advanced section

    Returns:
        DecodePresentationModel
    """
    state = as_details_state(details)

    multisend = is_multisend_call(decoded_data)
    native_transfer = is_native_transfer(decoded_data, tx.value)
    method_call_in_advanced = not show_method_call or multisend

    model = DecodePresentationModel(
        decoded_data=decoded_data,
        to=AddressInfo(value=tx.to),
        to_info=resolve_to_info(tx, state),
        value=tx.value,
        operation=get_operation(tx.operation),
        trusted_delegate_call_target=resolve_trusted_delegate_call_target(state),
        address_info_index=resolve_address_info_index(state),
        is_multisend=multisend,
        is_native_transfer=native_transfer,
        is_method_call_in_advanced=method_call_in_advanced,
        advanced_summary_label=_advanced_summary_label(
            decoded_data, method_call_in_advanced, native_transfer, show_method_call
        ),
        details_status=state.status,
        details_error=state.error,
        show_full_summary=state.is_loaded
    )

    if multisend and show_multisend:
        if state.is_loaded and state.details.tx_data is not None:
            multisend_tx_data = state.details.tx_data
        else:
            multisend_tx_data = model.to_tx_data(hex_data=tx.data)
        model = model.model_copy(update={"multisend_tx_data": multisend_tx_data})

    return model
