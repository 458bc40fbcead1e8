"""Canonical document locations. Every collection name lives here and nowhere else."""

from __future__ import annotations

from datetime import datetime

SERVICES = "services"
STYLISTS = "stylists"
CUSTOMERS = "customers"
GALLERY = "gallery"
ADMIN_APPOINTMENTS = "admin_appointments"
APPOINTMENTS = "appointments"
ADMIN_ROLES = "roles_admin"
SLOT_CLAIMS = "slot_claims"
IDENTITIES = "identities"
IDENTITY_EMAILS = "identity_emails"


def service_doc(service_id: str) -> str:
    return f"{SERVICES}/{service_id}"


def stylist_doc(stylist_id: str) -> str:
    return f"{STYLISTS}/{stylist_id}"


def customer_doc(customer_id: str) -> str:
    return f"{CUSTOMERS}/{customer_id}"


def gallery_doc(image_id: str) -> str:
    return f"{GALLERY}/{image_id}"


def admin_appointment_doc(appointment_id: str) -> str:
    return f"{ADMIN_APPOINTMENTS}/{appointment_id}"


def stylist_appointments(stylist_id: str) -> str:
    return f"{STYLISTS}/{stylist_id}/{APPOINTMENTS}"


def stylist_appointment_doc(stylist_id: str, appointment_id: str) -> str:
    return f"{stylist_appointments(stylist_id)}/{appointment_id}"


def customer_appointments(customer_id: str) -> str:
    return f"{CUSTOMERS}/{customer_id}/{APPOINTMENTS}"


def customer_appointment_doc(customer_id: str, appointment_id: str) -> str:
    return f"{customer_appointments(customer_id)}/{appointment_id}"


def admin_marker_doc(uid: str) -> str:
    return f"{ADMIN_ROLES}/{uid}"


def identity_doc(uid: str) -> str:
    return f"{IDENTITIES}/{uid}"


def slot_claim_doc(stylist_id: str, start: datetime) -> str:
    return f"{SLOT_CLAIMS}/{stylist_id}_{start.strftime('%Y%m%dT%H%M')}"


def appointment_mirrors(customer_id: str, stylist_id: str, appointment_id: str) -> tuple[str, str, str]:
    """(admin-wide, stylist-scoped, customer-scoped) paths of one logical appointment."""
    return (
        admin_appointment_doc(appointment_id),
        stylist_appointment_doc(stylist_id, appointment_id),
        customer_appointment_doc(customer_id, appointment_id),
    )


def identity_email_doc(email: str) -> str:
    return f"{IDENTITY_EMAILS}/{email.strip().lower()}"
