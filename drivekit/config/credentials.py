"""Secure credential storage for network shares.

Uses the system keyring (Windows Credential Manager, macOS Keychain,
Linux Secret Service) so share passwords are never written to settings.
"""

from typing import Optional

import keyring
from keyring.errors import KeyringError

from drivekit.models import NetworkShareRequest


class ShareCredentialStore:
    """Share passwords in the system keyring, keyed by protocol, user and host."""

    SERVICE_NAME = "drivekit"

    def save_password(self, request: NetworkShareRequest, password: str) -> bool:
        """
        Save a share password securely.

        Args:
            request: Share the password belongs to
            password: Password to save

        Returns:
            True if saved successfully, False otherwise
        """
        try:
            keyring.set_password(self.SERVICE_NAME, request.credential_key, password)
            return True
        except KeyringError:
            return False

    def get_password(self, request: NetworkShareRequest) -> Optional[str]:
        """
        Retrieve a saved share password.

        Args:
            request: Share to look up

        Returns:
            Password string or None if not found
        """
        try:
            return keyring.get_password(self.SERVICE_NAME, request.credential_key)
        except KeyringError:
            return None

    def delete_password(self, request: NetworkShareRequest) -> bool:
        """
        Remove a saved share password.

        Args:
            request: Share to forget

        Returns:
            True if deleted successfully, False otherwise
        """
        try:
            keyring.delete_password(self.SERVICE_NAME, request.credential_key)
            return True
        except KeyringError:
            return False

    def has_password(self, request: NetworkShareRequest) -> bool:
        """
        Check if a password is saved for a share.

        Args:
            request: Share to check

        Returns:
            True if password exists
        """
        return self.get_password(request) is not None
