from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Identity:
    uid: str
    email: str


class IdentityProviderPort(ABC):
    @abstractmethod
    def sign_in(self, email: str, password: str) -> Identity:
        """
        Authenticate an existing identity.

        Raises:
            IdentityNotFoundError: no identity with this email
            InvalidCredentialsError: identity exists, password does not match
        """
        raise NotImplementedError

    @abstractmethod
    def create_user(
        self,
        email: str,
        password: str,
        uid: str | None = None,
        with_documents: dict[str, dict[str, Any]] | None = None,
    ) -> Identity:
        """
        Create a new identity. ``with_documents`` (path -> data) are written in the
        same commit, so a role marker or profile never lags behind its identity.

        Raises:
            IdentityAlreadyExistsError: email already registered
        """
        raise NotImplementedError

    @abstractmethod
    def get_user(self, uid: str) -> Identity | None:
        raise NotImplementedError
