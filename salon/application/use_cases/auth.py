from __future__ import annotations

import logging
from dataclasses import dataclass

from salon.application.exceptions import (
    AccessDeniedError,
    IdentityNotFoundError,
    ValidationError,
)
from salon.application.ports.document_store import DocumentStorePort
from salon.application.ports.identity_provider import Identity, IdentityProviderPort
from salon.application.utils import store_paths
from salon.application.utils.validation import require_email, require_text
from salon.domain.entities.customer import Customer
from salon.domain.entities.principal import Principal, Role

MIN_PASSWORD_LENGTH = 6


class RoleResolver:
    """Admin iff a marker document exists at roles_admin/{uid}; otherwise customer."""

    def __init__(self, store: DocumentStorePort) -> None:
        self._store = store

    def has_role(self, uid: str) -> Role:
        if self._store.exists(store_paths.admin_marker_doc(uid)):
            return Role.admin
        return Role.customer


@dataclass
class AuthUseCase:
    identity: IdentityProviderPort
    store: DocumentStorePort

    def __post_init__(self) -> None:
        self.roles = RoleResolver(self.store)
        self._logger = logging.getLogger(__name__)

    def admin_login(self, email: str, password: str) -> Principal:
        """
        Sign in an administrator. A first login for an unknown email provisions the
        identity and its admin marker on the spot; there is no separate admin signup.
        """
        email = require_email(email)
        _check_password(password)
        try:
            identity = self.identity.sign_in(email, password)
        except IdentityNotFoundError:
            uid = self.store.new_id()
            identity = self.identity.create_user(
                email, password, uid=uid, with_documents={store_paths.admin_marker_doc(uid): {}}
            )
            self._logger.info("Admin provisioned on first login", extra={"uid": identity.uid})

        principal = self.resolve(identity)
        if not principal.is_admin:
            self._logger.warning("Admin login refused for non-admin identity", extra={"uid": identity.uid})
            raise AccessDeniedError("This account does not have administrator access.")
        return principal

    def customer_signup(
        self,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        phone: str = "",
    ) -> Principal:
        email = require_email(email)
        _check_password(password)
        first_name = require_text(first_name, "first_name")
        last_name = require_text(last_name, "last_name")

        uid = self.store.new_id()
        profile = Customer(
            id=uid,
            first_name=first_name,
            last_name=last_name,
            email=email,
            phone=(phone or "").strip(),
        )
        identity = self.identity.create_user(
            email, password, uid=uid, with_documents={store_paths.customer_doc(uid): profile.to_document()}
        )
        self._logger.info("Customer signed up", extra={"customer_id": identity.uid})
        return self.resolve(identity)

    def customer_login(self, email: str, password: str) -> Principal:
        identity = self.identity.sign_in(require_email(email), password)
        return self.resolve(identity)

    def resolve(self, identity: Identity) -> Principal:
        return Principal(uid=identity.uid, email=identity.email, role=self.roles.has_role(identity.uid))

    def principal_for(self, uid: str) -> Principal | None:
        identity = self.identity.get_user(uid)
        if identity is None:
            return None
        return self.resolve(identity)


def _check_password(password: str) -> None:
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters.")
