from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from auth import router as auth_router
from core import db
from core.config import get_settings
from core.errors import AppError, app_error_handler
from core.log import setup_logging
from messages import router as messages_router
from users import router as users_router

settings = get_settings()
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Initialize the DB pool once per process.
    await db.init_pool(get_settings())
    try:
        yield
    finally:
        await db.close_pool()


app = FastAPI(title="messagely", lifespan=lifespan)

# Allow the frontend dev server to call this API from the browser.
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(AppError, app_error_handler)

app.include_router(auth_router.router, prefix="/auth", tags=["auth"])
# Bare /login and /register paths.
app.include_router(auth_router.router, tags=["auth"], include_in_schema=False)
app.include_router(users_router.router, tags=["users"])
app.include_router(messages_router.router, tags=["messages"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "messagely api"}
