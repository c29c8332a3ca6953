import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from categories import router as categories_router
from core import config, db, schema
from core.errors import register_exception_handlers
from products import router as products_router

logging.basicConfig(
    level=config.log_level(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Initialize the DB pool once per process, then make sure tables exist.
    await db.init_pool()
    try:
        await schema.ensure_schema()
        yield
    finally:
        await db.close_pool()


app = FastAPI(
    title="Catalog API",
    version="1.0.0",
    description="Products and categories with nested images, features and pagination",
    lifespan=lifespan,
)

register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_allow_origins(),
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(products_router.router, tags=["products"])
app.include_router(categories_router.router, tags=["categories"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}
