"""Identity resource operations: API credentials, sub-users and roles.

Token issuance lives on the client itself because it mutates shared
client state (token, tenant id and endpoints).
"""

from __future__ import annotations

from .endpoints import Service
from .resource import ServiceResource
from .schemas.common import Envelope, member
from .schemas.identity import CreateSubUserRequest, Credential, RoleDetail, SubUser

_CREDENTIAL = Envelope("credential", Credential)
_USER = Envelope("user", SubUser)
_ROLE = Envelope("role", RoleDetail)


class IdentityResource(ServiceResource):
    """EC2-style credentials, sub-users, roles and permissions."""

    service = Service.IDENTITY

    def list_credentials(self, user_id: str) -> list[Credential]:
        return _CREDENTIAL.unwrap_list(self._request("GET", f"/users/{user_id}/credentials/OS-EC2"))

    def create_credential(self, user_id: str, tenant_id: str) -> Credential:
        """Create an access/secret key pair scoped to a tenant.

        Args:
            user_id: API user id.
            tenant_id: Tenant id the credential is valid for.

        Returns:
            Credential: New key pair; the secret is readable only here and via get.
        """
        body = {"tenant_id": tenant_id}
        return _CREDENTIAL.unwrap(self._request("POST", f"/users/{user_id}/credentials/OS-EC2", body=body))

    def get_credential(self, user_id: str, credential_id: str) -> Credential:
        path = f"/users/{user_id}/credentials/OS-EC2/{credential_id}"
        return _CREDENTIAL.unwrap(self._request("GET", path))

    def delete_credential(self, user_id: str, credential_id: str) -> None:
        self._request("DELETE", f"/users/{user_id}/credentials/OS-EC2/{credential_id}")

    def list_sub_users(self) -> list[SubUser]:
        return _USER.unwrap_list(self._request("GET", "/sub-users"))

    def create_sub_user(self, password: str, roles: list[str]) -> SubUser:
        body = _USER.wrap(CreateSubUserRequest(password=password, roles=roles))
        return _USER.unwrap(self._request("POST", "/sub-users", body=body))

    def get_sub_user(self, sub_user_id: str) -> SubUser:
        return _USER.unwrap(self._request("GET", f"/sub-users/{sub_user_id}"))

    def update_sub_user(self, sub_user_id: str, password: str) -> SubUser:
        body = _USER.wrap({"password": password})
        return _USER.unwrap(self._request("PUT", f"/sub-users/{sub_user_id}", body=body))

    def delete_sub_user(self, sub_user_id: str) -> None:
        self._request("DELETE", f"/sub-users/{sub_user_id}")

    def assign_roles(self, sub_user_id: str, role_ids: list[str]) -> SubUser:
        body = {"roles": role_ids}
        return _USER.unwrap(self._request("POST", f"/sub-users/{sub_user_id}/assign", body=body))

    def unassign_roles(self, sub_user_id: str, role_ids: list[str]) -> SubUser:
        body = {"roles": role_ids}
        return _USER.unwrap(self._request("POST", f"/sub-users/{sub_user_id}/unassign", body=body))

    def list_roles(self) -> list[RoleDetail]:
        return _ROLE.unwrap_list(self._request("GET", "/sub-users/roles"))

    def create_role(self, name: str, permissions: list[str]) -> RoleDetail:
        body = _ROLE.wrap({"name": name, "permissions": permissions})
        return _ROLE.unwrap(self._request("POST", "/sub-users/roles", body=body))

    def get_role(self, role_id: str) -> RoleDetail:
        return _ROLE.unwrap(self._request("GET", f"/sub-users/roles/{role_id}"))

    def update_role(self, role_id: str, name: str) -> RoleDetail:
        body = _ROLE.wrap({"name": name})
        return _ROLE.unwrap(self._request("PUT", f"/sub-users/roles/{role_id}", body=body))

    def delete_role(self, role_id: str) -> None:
        self._request("DELETE", f"/sub-users/roles/{role_id}")

    def list_permissions(self) -> list[str]:
        return [str(item) for item in member(self._request("GET", "/permissions"), "permissions") or []]

    def assign_permissions(self, role_id: str, permissions: list[str]) -> RoleDetail:
        body = {"permissions": permissions}
        return _ROLE.unwrap(self._request("POST", f"/sub-users/roles/{role_id}/assign", body=body))

    def unassign_permissions(self, role_id: str, permissions: list[str]) -> RoleDetail:
        body = {"permissions": permissions}
        return _ROLE.unwrap(self._request("POST", f"/sub-users/roles/{role_id}/unassign", body=body))
