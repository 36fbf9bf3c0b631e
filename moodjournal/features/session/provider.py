"""
Session providers - the identity boundary.

SessionProvider is what the journal needs from an auth system: the current
identity, a change notification, and token verification for the HTTP
adapter. SupabaseSessionProvider implements it on Supabase Auth.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from moodjournal.core.logging_utils import redact_emails
from moodjournal.features.session.models import Identity
from moodjournal.shared.errors import AuthRequired, TransientError

logger = logging.getLogger("MoodJournal.Session.Provider")

IdentityListener = Callable[[Optional[Identity]], None]


class SessionProvider(ABC):
    """Source of the authenticated identity."""

    @abstractmethod
    def current_identity(self) -> Optional[Identity]:
        """Identity of the stored session, if any."""

    @abstractmethod
    def subscribe(self, listener: IdentityListener) -> Callable[[], None]:
        """
        Call listener on every sign-in / sign-out.

        Returns:
            A function that removes the subscription
        """

    @abstractmethod
    def verify_token(self, access_token: str) -> Identity:
        """Identity for a bearer token; AuthRequired if it is not valid."""


class SupabaseSessionProvider(SessionProvider):
    """Supabase Auth implementation."""

    def __init__(self, client):
        """Initialize with Supabase client."""
        self.client = client

    def current_identity(self) -> Optional[Identity]:
        try:
            session = self.client.auth.get_session()
        except Exception as e:
            logger.error(f"Error reading auth session: {e}")
            raise TransientError("Could not read the current session") from e
        return _identity_from_session(session)

    def subscribe(self, listener: IdentityListener) -> Callable[[], None]:
        def _on_change(event: str, session: Any) -> None:
            logger.info(f"Auth state changed: {event}")
            listener(_identity_from_session(session))

        subscription = self.client.auth.on_auth_state_change(_on_change)
        return subscription.unsubscribe

    def verify_token(self, access_token: str) -> Identity:
        try:
            response = self.client.auth.get_user(access_token)
        except Exception as e:
            logger.info(f"Rejected access token: {e}")
            raise AuthRequired("Session expired, please sign in again") from e

        if response is None or response.user is None:
            raise AuthRequired("Session expired, please sign in again")
        return Identity.from_user(response.user)

    def sign_in(self, email: str, password: str) -> Identity:
        try:
            response = self.client.auth.sign_in_with_password({"email": email, "password": password})
        except Exception as e:
            logger.info(f"Sign-in failed for {redact_emails(email)}: {e}")
            raise AuthRequired(str(e)) from e
        return Identity.from_user(response.user)

    def sign_up(self, email: str, password: str, display_name: Optional[str] = None) -> Optional[Identity]:
        """
        Create an account; the display name goes into user metadata.

        Returns:
            The new identity, or None if email confirmation is pending
        """
        credentials = {"email": email, "password": password}
        if display_name:
            credentials["options"] = {"data": {"display_name": display_name}}
        try:
            response = self.client.auth.sign_up(credentials)
        except Exception as e:
            logger.info(f"Sign-up failed for {redact_emails(email)}: {e}")
            raise AuthRequired(str(e)) from e

        if response.session is None:
            logger.info("Sign-up pending email confirmation")
            return None
        return Identity.from_user(response.user)

    def sign_out(self) -> None:
        self.client.auth.sign_out()


def _identity_from_session(session: Any) -> Optional[Identity]:
    if session is None or getattr(session, "user", None) is None:
        return None
    return Identity.from_user(session.user)
