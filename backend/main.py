import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api import catalog_router, checkout_router
from config import settings
from logging_config import setup_logging

setup_logging()
logger = logging.getLogger("storefront")

app = FastAPI(title="Stopunaise Storefront API")

if settings.allowed_origins == ["*"]:
    allow_origins = ["*"]
else:
    allow_origins = settings.allowed_origins

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=allow_origins != ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(catalog_router)
app.include_router(checkout_router)


@app.on_event("startup")
async def _on_startup() -> None:
    logger.info("Storefront API starting")
    if allow_origins == ["*"]:
        logger.warning(
            "CORS is set to allow all origins; set ALLOWED_ORIGINS to explicit values in production."
        )


@app.get("/health")
def health_check():
    return {"status": "ok"}
