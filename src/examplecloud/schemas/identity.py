"""Identity service models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from .common import APIModel


class CatalogEndpoint(APIModel):
    id: str = ""
    interface: str = ""
    region_id: str = ""
    url: str = ""
    region: str = ""


class ServiceCatalog(APIModel):
    endpoints: list[CatalogEndpoint] = Field(default_factory=list)
    id: str = ""
    type: str = ""
    name: str = ""


class DomainRef(APIModel):
    id: str = ""
    name: str = ""


class TokenProject(APIModel):
    domain: DomainRef = Field(default_factory=DomainRef)
    id: str = ""
    name: str = ""


class TokenUser(APIModel):
    domain: DomainRef = Field(default_factory=DomainRef)
    id: str = ""
    name: str = ""
    password_expires_at: str | None = None


class Role(APIModel):
    id: str = ""
    name: str = ""


class Token(APIModel):
    """Issued token body. The token value itself arrives in ``X-Subject-Token``."""

    audit_ids: list[str] = Field(default_factory=list)
    catalog: list[ServiceCatalog] = Field(default_factory=list)
    expires_at: str = ""
    issued_at: str = ""
    methods: list[str] = Field(default_factory=list)
    project: TokenProject = Field(default_factory=TokenProject)
    roles: list[Role] = Field(default_factory=list)
    user: TokenUser = Field(default_factory=TokenUser)


class AuthUser(BaseModel):
    id: str | None = None
    name: str | None = None
    password: str


class AuthProject(BaseModel):
    id: str | None = None
    name: str | None = None


def password_auth_body(user: AuthUser, project: AuthProject | None) -> dict:
    """Build the password-method token request body."""
    auth: dict = {
        "identity": {
            "methods": ["password"],
            "password": {"user": user.model_dump(exclude_none=True)},
        }
    }
    if project is not None:
        auth["scope"] = {"project": project.model_dump(exclude_none=True)}
    return {"auth": auth}


class Credential(APIModel):
    user_id: str = ""
    project_id: str = ""
    tenant_id: str = ""
    access: str = ""
    secret: str = ""
    trust_id: str | None = None


class SubUser(APIModel):
    id: str = ""
    name: str = ""
    roles: list[Role] = Field(default_factory=list)


class CreateSubUserRequest(BaseModel):
    password: str
    roles: list[str] = Field(default_factory=list)


class RoleDetail(APIModel):
    id: str = ""
    name: str = ""
    visibility: str = ""
    permissions: list[str] = Field(default_factory=list)
