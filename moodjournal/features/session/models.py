"""Identity and profile records handed out by the session layer."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict


class Identity(BaseModel):
    """The authenticated user on whose behalf the journal operates."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    email: Optional[str] = None
    metadata_display_name: Optional[str] = None

    @classmethod
    def from_user(cls, user: Any) -> "Identity":
        """Build from a Supabase auth user object."""
        metadata: Dict[str, Any] = getattr(user, "user_metadata", None) or {}
        return cls(
            user_id=str(user.id),
            email=getattr(user, "email", None),
            metadata_display_name=metadata.get("display_name"),
        )

    @property
    def email_local_part(self) -> Optional[str]:
        if not self.email:
            return None
        return self.email.split("@")[0]


class Profile(BaseModel):
    display_name: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Profile":
        return cls(display_name=row.get("display_name") or None)


def resolve_display_name(identity: Identity, profile: Optional[Profile]) -> Optional[str]:
    """
    Stored profile name first, then the name given at sign-up, then the
    local part of the email address.
    """
    if profile is not None and profile.display_name:
        return profile.display_name
    return identity.metadata_display_name or identity.email_local_part
