from typing import Annotated, Literal, Optional, Union
from pydantic import BaseModel, Field


class NormalizedPhone(BaseModel):
    canonical: str
    suffix: str


class ProfileIdentity(BaseModel):
    kind: Literal["profile"] = "profile"
    org_id: str
    role: str
    display_name: Optional[str] = None


class TenantIdentity(BaseModel):
    kind: Literal["tenant"] = "tenant"
    org_id: str
    role: Literal["tenant"] = "tenant"
    display_name: Optional[str] = None
    site_id: Optional[str] = None
    block_id: Optional[str] = None


class RequesterIdentity(BaseModel):
    kind: Literal["requester"] = "requester"
    org_id: str
    status: str


class Unresolved(BaseModel):
    kind: Literal["unresolved"] = "unresolved"


Identity = Annotated[
    Union[ProfileIdentity, TenantIdentity, RequesterIdentity, Unresolved],
    Field(discriminator="kind"),
]


class FallbackRoute(BaseModel):
    """Organization picked for a sender no identity table knows."""
    org_id: str
    org_name: Optional[str] = None
    site_id: Optional[str] = None
    # site_code | default_org | latest_org
    strategy: str
