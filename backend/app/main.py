import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.errors import register_error_handlers
from app.api.health import router as health_router
from app.api.routes_products import router as products_router
from app.config import settings
from app.store import init_store


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Use env var RESET_STORE=1 to start from an empty products file
    reset = os.environ.get("RESET_STORE", "0") in ("1", "true", "True")
    init_store(reset=reset)
    yield


app = FastAPI(title="Product Inventory - Backend", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "HEAD", "PUT", "PATCH", "POST", "DELETE"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(health_router, prefix="/api", tags=["health"])

app.include_router(products_router, prefix="/api/products", tags=["products"])
