import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from auth import router as auth_router
from categories import router as categories_router
from core import config, db, errors
from files import router as files_router
from info import router as info_router
from records import router as records_router
from updates import router as updates_router
from users import router as users_router
from users import service as users_service

config.configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Initialize the DB pool once per process.
    await db.init_pool()
    try:
        if config.env_bool("DB_APPLY_SCHEMA", True):
            await db.apply_schema()
        await users_service.ensure_default_admin()
        yield
    finally:
        await db.close_pool()


app = FastAPI(title="members-portal", lifespan=lifespan)

origins = config.cors_origins()
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    # Browsers reject credentialed requests to a wildcard origin.
    allow_credentials="*" not in origins,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type"],
)

errors.install(app)

app.include_router(auth_router.router, tags=["auth"])
app.include_router(updates_router.router, tags=["updates"])
app.include_router(categories_router.router, tags=["categories"])
app.include_router(info_router.router, tags=["info"])
app.include_router(files_router.router, tags=["files"])
app.include_router(users_router.router, tags=["users"])
app.include_router(records_router.router, tags=["records"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "members-portal api"}
