#!/usr/bin/env python3
"""
Load a demo catalogue into the configured document store.

Usage:
  STORE_PROVIDER=json python3 scripts/seed_catalog.py

Services and stylists go through CatalogUseCase, so the same validation as the
admin screens applies. Running it twice adds a second copy; point STORE_DATA_FILE
at a fresh file for a clean catalogue.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from salon.application.use_cases.catalog import CatalogUseCase  # noqa: E402
from salon.domain.entities.stylist import AvailabilitySlot  # noqa: E402
from salon.wiring.dependencies import get_store  # noqa: E402

SERVICES = [
    ("Corte Diva", "Corte de cabello personalizado con lavado y secado.", 25.0, 60),
    ("Manicura Clásica", "Limado, cutículas y esmaltado tradicional.", 15.0, 30),
    ("Pedicura Spa", "Pedicura completa con exfoliación, masaje y esmaltado.", 30.0, 60),
    ("Tinte Completo", "Aplicación de color en todo el cabello.", 50.0, 120),
    ("Mechas Balayage", "Técnica de coloración a mano alzada para un look natural.", 75.0, 180),
    ("Facial Hidratante", "Tratamiento facial para restaurar la hidratación de la piel.", 40.0, 60),
]

SPLIT_DAY = [("09:00", "13:00"), ("14:00", "18:00")]

STYLISTS = {
    "Ana": {
        "monday": SPLIT_DAY,
        "tuesday": SPLIT_DAY,
        "wednesday": SPLIT_DAY,
        "thursday": SPLIT_DAY,
        "friday": [("10:00", "19:00")],
        "saturday": [("10:00", "16:00")],
    },
    "Sofía": {day: [("09:00", "17:00")] for day in ("monday", "tuesday", "wednesday", "thursday", "friday")},
    "Carla": {
        "wednesday": [("10:00", "14:00"), ("15:00", "19:00")],
        "thursday": [("10:00", "14:00"), ("15:00", "19:00")],
        "friday": [("10:00", "14:00"), ("15:00", "19:00")],
        "saturday": [("10:00", "18:00")],
    },
    "Lucía": {
        "monday": SPLIT_DAY,
        "tuesday": SPLIT_DAY,
        "saturday": [("09:00", "15:00")],
    },
}


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(name)s:%(message)s")
    catalog = CatalogUseCase(get_store())

    for name, description, price, duration in SERVICES:
        service = catalog.create_service(name, description, price, duration)
        print(f"service  {service.id}  {service.name}  {service.price:.2f}  {service.duration} min")

    for index, (name, hours) in enumerate(STYLISTS.items(), start=1):
        availability = {day: [AvailabilitySlot(start, end) for start, end in windows] for day, windows in hours.items()}
        stylist = catalog.create_stylist(
            name,
            avatar_url=f"https://picsum.photos/seed/stylist{index}/100/100",
            availability=availability,
        )
        print(f"stylist  {stylist.id}  {stylist.name}  {', '.join(stylist.availability)}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
