from typing import Dict, Optional, Tuple

from schemas import DeliveryZone, LineItem, ZoneClass

FREE_DELIVERY_THRESHOLD_ML = 500

ACCESSORY_NAME = "Kit de dosage"
ACCESSORY_DESCRIPTION = "Kit professionnel pour un dosage précis et sécurisé"
ACCESSORY_PRICE = 1000

PLACEHOLDER_IMAGE_URL = "https://via.placeholder.com/200x200?text=Sniper+DDVP"

BASE_PRODUCTS: Tuple[LineItem, ...] = (
    LineItem(id="100ml", name="Sniper DDVP 100ml", volume="100ml", price=2500),
    LineItem(id="250ml", name="Sniper DDVP 250ml", volume="250ml", price=6000),
)

ZONE_LABELS: Dict[ZoneClass, str] = {
    "abidjan": "Abidjan",
    "outlying": "Communes périphériques",
    "outside": "Hors Abidjan",
}

_ZONE_FEES: Dict[ZoneClass, int] = {
    "abidjan": 1500,
    "outlying": 2000,
    "outside": 3000,
}

_MUNICIPALITIES: Tuple[Tuple[str, ZoneClass], ...] = (
    ("Abobo", "abidjan"),
    ("Adjamé", "abidjan"),
    ("Attécoubé", "abidjan"),
    ("Cocody", "abidjan"),
    ("Koumassi", "abidjan"),
    ("Marcory", "abidjan"),
    ("Le Plateau", "abidjan"),
    ("Port-Bouët", "abidjan"),
    ("Treichville", "abidjan"),
    ("Yopougon", "abidjan"),
    ("Anyama", "outlying"),
    ("Bingerville", "outlying"),
    ("Songon", "outlying"),
    ("Autres communes (Hors Abidjan)", "outside"),
)

DELIVERY_ZONES: Tuple[DeliveryZone, ...] = tuple(
    DeliveryZone(name=name, zone=zone, delivery_fee=_ZONE_FEES[zone])
    for name, zone in _MUNICIPALITIES
)

_ZONES_BY_NAME: Dict[str, DeliveryZone] = {zone.name: zone for zone in DELIVERY_ZONES}


def find_zone(name: Optional[str]) -> Optional[DeliveryZone]:
    if not name:
        return None
    return _ZONES_BY_NAME.get(name)


def zone_fee(zone: ZoneClass) -> int:
    return _ZONE_FEES[zone]
