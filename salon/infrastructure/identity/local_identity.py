from __future__ import annotations

import logging
from typing import Any

from passlib.context import CryptContext

from salon.application.exceptions import (
    BatchConflictError,
    IdentityAlreadyExistsError,
    IdentityNotFoundError,
    InvalidCredentialsError,
)
from salon.application.ports.document_store import DocumentStorePort
from salon.application.ports.identity_provider import Identity, IdentityProviderPort
from salon.application.utils import store_paths

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class LocalIdentityProvider(IdentityProviderPort):
    """
    Identity provider backed by the document store.

    ``identity_emails/{email}`` is created with create-only semantics in the same
    batch as ``identities/{uid}``, so two signups racing on one email cannot both win.
    """

    def __init__(self, store: DocumentStorePort) -> None:
        self._store = store
        self._logger = logging.getLogger(__name__)

    def sign_in(self, email: str, password: str) -> Identity:
        normalized = _normalize_email(email)
        pointer = self._store.get(store_paths.identity_email_doc(normalized))
        if pointer is None:
            raise IdentityNotFoundError("No account exists for this email.")
        record = self._store.get(store_paths.identity_doc(pointer["uid"]))
        if record is None:
            raise IdentityNotFoundError("No account exists for this email.")
        if not pwd_context.verify(password, record.get("password_hash", "")):
            raise InvalidCredentialsError("Invalid credentials.")
        return Identity(uid=record["uid"], email=record["email"])

    def create_user(
        self,
        email: str,
        password: str,
        uid: str | None = None,
        with_documents: dict[str, dict[str, Any]] | None = None,
    ) -> Identity:
        normalized = _normalize_email(email)
        uid = uid or self._store.new_id()
        batch = self._store.batch()
        batch.create(store_paths.identity_email_doc(normalized), {"uid": uid})
        batch.create(
            store_paths.identity_doc(uid),
            {"uid": uid, "email": normalized, "password_hash": pwd_context.hash(password)},
        )
        for path, data in (with_documents or {}).items():
            batch.set(path, data)
        try:
            batch.commit()
        except BatchConflictError as e:
            raise IdentityAlreadyExistsError("An account already exists for this email.") from e
        self._logger.info("Identity created", extra={"uid": uid})
        return Identity(uid=uid, email=normalized)

    def get_user(self, uid: str) -> Identity | None:
        record = self._store.get(store_paths.identity_doc(uid))
        if record is None:
            return None
        return Identity(uid=record["uid"], email=record["email"])


def _normalize_email(email: str) -> str:
    return (email or "").strip().lower()
