"""Pydantic models for OpenShift role bindings."""

from pydantic import Field

from ssp_mcp.models.common import APIDocument, ObjectMeta


class RoleBinding(APIDocument):
    """Role binding document from the ``oapi/v1`` API.

    Only the member list is modelled; subjects, roleRef and the other
    fields pass through unchanged.
    """

    metadata: ObjectMeta | None = None
    user_names: list[str] | None = Field(
        None, alias="userNames", description="Usernames bound to the role"
    )

    @property
    def members(self) -> list[str]:
        return list(self.user_names or [])

    def add_user(self, username: str) -> None:
        """Append ``username`` in lower and upper case.

        Existing entries are not checked, so granting twice adds the names
        again.
        """
        self.user_names = [*self.members, username.lower(), username.upper()]

    def has_member(self, username: str) -> bool:
        """Case-insensitive membership test."""
        wanted = username.lower()
        return any(member.lower() == wanted for member in self.members)
