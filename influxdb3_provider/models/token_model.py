"""State models for the token resource and data sources."""

from typing import List, Optional

from pydantic import BaseModel, Field

from influxdb3_provider.services.influxdb3.models.types import Permission, Token


class TokenPermissionModel(BaseModel):
    action: str
    resource: str


class TokenModel(BaseModel):
    # Only known right after creation; kept from prior state afterwards
    access_token: Optional[str] = Field(default=None, repr=False)
    account_id: Optional[str] = None
    created_at: Optional[str] = None
    cluster_id: Optional[str] = None
    description: Optional[str] = None
    id: Optional[str] = None
    permissions: Optional[List[TokenPermissionModel]] = None


class TokensDataSourceModel(BaseModel):
    tokens: List[TokenModel] = Field(default_factory=list)


def get_permissions(permissions: List[Permission]) -> List[TokenPermissionModel]:
    return [
        TokenPermissionModel(action=p.action, resource=p.resource) for p in permissions
    ]


def to_permissions(models: Optional[List[TokenPermissionModel]]) -> List[Permission]:
    return [Permission(action=m.action, resource=m.resource) for m in models or []]


def token_model_from_api(token: Token, access_token: Optional[str] = None) -> TokenModel:
    """Build a state model from an API token.

    Args:
        token: Token returned by the API
        access_token: Access token to keep when the response does not carry one
    """
    return TokenModel(
        access_token=token.access_token or access_token,
        account_id=token.account_id,
        created_at=token.created_at,
        cluster_id=token.cluster_id,
        description=token.description,
        id=token.id,
        permissions=get_permissions(token.permissions),
    )
