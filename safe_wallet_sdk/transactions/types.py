"""
Data models for Safe multisig transactions and their decoded call data.

Models that mirror client gateway responses accept the gateway's camelCase
keys as well as snake_case field names.
"""
from enum import Enum, IntEnum
from typing import Annotated, Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, field_validator
from pydantic.alias_generators import to_camel
from web3 import Web3


class Operation(IntEnum):
    """Semantic operation kind of a Safe transaction"""
    CALL = 0
    DELEGATE = 1


# Raw operation code that means delegatecall, as used by Safe contracts
DELEGATE_CALL_CODE = 1


class GatewayModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True
    )


class RawTransaction(GatewayModel):
    """The transaction as the Safe will execute it"""
    to: str
    value: int = 0
    operation: int = 0
    data: str = "0x"

    @field_validator("to")
    @classmethod
    def _checksum_to(cls, value: str) -> str:
        return Web3.to_checksum_address(value)

    @field_validator("value", mode="before")
    @classmethod
    def _parse_value(cls, value: Any) -> Any:
        return 0 if value in (None, "") else value


class AddressInfo(GatewayModel):
    """An address with its optional human readable identity"""
    value: str
    name: Optional[str] = None
    logo_uri: Optional[str] = None


class DecodedInnerCall(GatewayModel):
    """One call of a multisend batch"""
    operation: int = 0
    to: str
    value: Optional[int] = None
    data: Optional[str] = None
    data_decoded: Optional["DecodedCallData"] = None


class DecodedParameter(GatewayModel):
    """
    A decoded method parameter.

    `value_decoded` is only set when the parameter itself encodes further
    calls, which is how multisend batches are represented.
    """
    name: str = ""
    type: str = ""
    value: Any = None
    value_decoded: Optional[List[DecodedInnerCall]] = None

    @property
    def nested_calls(self) -> List[DecodedInnerCall]:
        return list(self.value_decoded or [])

    @property
    def has_nested_calls(self) -> bool:
        return bool(self.value_decoded)


class DecodedCallData(GatewayModel):
    method: Optional[str] = None
    parameters: List[DecodedParameter] = Field(default_factory=list)

    @field_validator("parameters", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value


DecodedInnerCall.model_rebuild()
DecodedParameter.model_rebuild()
DecodedCallData.model_rebuild()


class TxData(GatewayModel):
    """Transaction data as returned in gateway transaction details"""
    hex_data: Optional[str] = None
    data_decoded: Optional[DecodedCallData] = None
    to: AddressInfo
    value: Optional[int] = None
    operation: Operation = Operation.CALL
    trusted_delegate_call_target: Optional[bool] = None
    address_info_index: Optional[Dict[str, AddressInfo]] = None


CUSTOM_TX_INFO_TYPE = "Custom"


class GenericTxInfo(GatewayModel):
    """Any transaction info variant the SDK does not inspect further"""
    type: str


class CustomTxInfo(GatewayModel):
    """Transaction info for calls to a contract with its own display identity"""
    type: str = CUSTOM_TX_INFO_TYPE
    to: AddressInfo
    data_size: Optional[str] = None
    value: Optional[str] = None
    method_name: Optional[str] = None
    action_count: Optional[int] = None
    is_cancellation: bool = False


def _tx_info_tag(value: Any) -> str:
    tx_type = value.get("type") if isinstance(value, dict) else getattr(value, "type", None)
    return "custom" if tx_type == CUSTOM_TX_INFO_TYPE else "generic"


TxInfo = Annotated[
    Union[Annotated[CustomTxInfo, Tag("custom")], Annotated[GenericTxInfo, Tag("generic")]],
    Discriminator(_tx_info_tag),
]


def is_custom_tx_info(tx_info: Optional[TxInfo]) -> bool:
    return isinstance(tx_info, CustomTxInfo)


class TxDetails(GatewayModel):
    """Transaction details as served by the client gateway"""
    tx_id: str
    safe_address: Optional[str] = None
    tx_status: Optional[str] = None
    tx_info: TxInfo
    tx_data: Optional[TxData] = None
    tx_hash: Optional[str] = None
    executed_at: Optional[int] = None


class DetailsStatus(str, Enum):
    """Where the asynchronous details lookup stands"""
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERRORED = "errored"


class TxDetailsState(BaseModel):
    """Snapshot of a transaction details lookup"""
    model_config = ConfigDict(frozen=True)

    status: DetailsStatus = DetailsStatus.IDLE
    details: Optional[TxDetails] = None
    error: Optional[str] = None

    @classmethod
    def idle(cls) -> "TxDetailsState":
        return cls(status=DetailsStatus.IDLE)

    @classmethod
    def loading(cls) -> "TxDetailsState":
        return cls(status=DetailsStatus.LOADING)

    @classmethod
    def loaded(cls, details: TxDetails) -> "TxDetailsState":
        return cls(status=DetailsStatus.LOADED, details=details)

    @classmethod
    def errored(cls, error: Union[str, Exception]) -> "TxDetailsState":
        return cls(status=DetailsStatus.ERRORED, error=str(error))

    @property
    def is_loading(self) -> bool:
        return self.status == DetailsStatus.LOADING

    @property
    def is_loaded(self) -> bool:
        return self.status == DetailsStatus.LOADED and self.details is not None

    @property
    def is_errored(self) -> bool:
        return self.status == DetailsStatus.ERRORED
