"""
Data models for Safe App manifests and resolved apps.
"""
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class AccessPolicyType(str, Enum):
    """Access control policies understood by the app registry."""
    NO_RESTRICTIONS = "NO_RESTRICTIONS"
    DOMAIN_ALLOWLIST = "DOMAIN_ALLOWLIST"


class AppManifestIcon(BaseModel):
    """A single entry of a Web App Manifest `icons` list"""
    model_config = ConfigDict(extra="ignore")

    src: Optional[str] = ""
    sizes: Optional[str] = ""
    type: Optional[str] = None
    purpose: Optional[str] = None

    @field_validator("src", "sizes", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class AppManifest(BaseModel):
    """
    Web App Manifest as published by a Safe App.

    See https://developer.mozilla.org/en-US/docs/Web/Manifest. Only the keys
    needed to register the app are modelled, everything else is ignored.
    """
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str
    short_name: Optional[str] = None
    description: str
    icons: Optional[List[AppManifestIcon]] = None
    icon_path: Optional[str] = Field(None, alias="iconPath")
    safe_apps_permissions: Optional[List[str]] = None


class AccessControl(BaseModel):
    type: AccessPolicyType = AccessPolicyType.NO_RESTRICTIONS


class ResolvedApp(BaseModel):
    """
    A Safe App built from a remote manifest, ready for registration.

    The `id` is a local placeholder; the registry assigns the real one.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    url: str
    name: str
    description: str
    access_control: AccessControl = Field(default_factory=AccessControl)
    tags: List[str] = Field(default_factory=list)
    features: List[str] = Field(default_factory=list)
    social_profiles: List[Dict[str, Any]] = Field(default_factory=list)
    developer_website: str = ""
    chain_ids: List[str]
    icon_url: str
    safe_apps_permissions: List[str] = Field(default_factory=list)

    def to_registry_payload(self) -> Dict[str, Any]:
        """Serialize with the camelCase keys the app registry expects."""
        return self.model_dump(by_alias=True, mode="json")
