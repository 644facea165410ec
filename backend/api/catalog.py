import asyncio

from fastapi import APIRouter

from catalog import (
    ACCESSORY_DESCRIPTION,
    ACCESSORY_NAME,
    ACCESSORY_PRICE,
    BASE_PRODUCTS,
    DELIVERY_ZONES,
    FREE_DELIVERY_THRESHOLD_ML,
    ZONE_LABELS,
    zone_fee,
)
from schemas import AccessoryInfo, CatalogResponse, ZoneGroup
from services.assets_service import get_asset_urls

router = APIRouter(prefix="/api/catalog", tags=["catalog"])


@router.get("", response_model=CatalogResponse)
async def read_catalog() -> CatalogResponse:
    assets = await asyncio.to_thread(get_asset_urls)
    zones = [
        ZoneGroup(
            zone=zone,
            label=label,
            delivery_fee=zone_fee(zone),
            municipalities=[m.name for m in DELIVERY_ZONES if m.zone == zone],
        )
        for zone, label in ZONE_LABELS.items()
    ]
    return CatalogResponse(
        products=list(BASE_PRODUCTS),
        accessory=AccessoryInfo(
            name=ACCESSORY_NAME,
            description=ACCESSORY_DESCRIPTION,
            price=ACCESSORY_PRICE,
        ),
        zones=zones,
        free_delivery_threshold_ml=FREE_DELIVERY_THRESHOLD_ML,
        assets=assets,
    )
