import logging
from typing import Optional

from catalog import PLACEHOLDER_IMAGE_URL
from config import settings
from schemas import AssetUrls
from supabase_client import get_supabase

logger = logging.getLogger("storefront")


def resolve_public_url(path: str, fallback: Optional[str] = None) -> Optional[str]:
    try:
        url = get_supabase().storage.from_(settings.assets_bucket).get_public_url(path)
    except Exception as exc:  # pragma: no cover - storage/network dependency
        logger.warning("Unable to resolve asset %s: %s", path, exc)
        return fallback
    return url or fallback


def get_asset_urls() -> AssetUrls:
    return AssetUrls(
        product_image_url=resolve_public_url(
            settings.product_image_path, PLACEHOLDER_IMAGE_URL
        ),
        logo_url=resolve_public_url(settings.logo_path),
    )
