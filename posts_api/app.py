from functools import lru_cache
from typing import Annotated, Any

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import VERSION, handlers
from .config import ALLOWED_ORIGINS, configure_logging
from .dynamo_utils import PostStore
from .errors import NotFoundError, PostsApiError, ValidationError


@lru_cache(maxsize=1)
def get_store() -> PostStore:
    return PostStore()


Store = Annotated[PostStore, Depends(get_store)]

posts_router = APIRouter()
post_router = APIRouter()


@posts_router.get("/posts")
def list_posts(store: Store) -> list[dict[str, Any]]:
    return handlers.get_all(store)


@posts_router.post("/posts")
async def create_post(request: Request, store: Store) -> dict[str, str]:
    body = await request.body()
    return handlers.create(body, store)


@post_router.get("/posts/{post_id}")
def read_post(post_id: str, store: Store) -> dict[str, Any]:
    return handlers.get_one(post_id, store)


@post_router.delete("/posts/{post_id}")
def delete_post(post_id: str, store: Store) -> dict[str, str]:
    return handlers.delete(post_id, store)


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


async def _handled_error(_: Request, exc: PostsApiError) -> JSONResponse:
    return _message(exc.status_code, str(exc))


async def _http_error(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _message(exc.status_code, str(exc.detail))


def build_app(*routers: APIRouter, health: bool = False) -> FastAPI:
    configure_logging()
    app = FastAPI(title="posts-api", version=VERSION)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in ALLOWED_ORIGINS if o.strip()],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ValidationError, _handled_error)
    app.add_exception_handler(NotFoundError, _handled_error)
    app.add_exception_handler(StarletteHTTPException, _http_error)

    if health:
        @app.get("/health")
        def _health():
            return {"ok": True}

    for router in routers:
        app.include_router(router)
    return app


app = build_app(posts_router, post_router, health=True)
posts_app = build_app(posts_router)
post_app = build_app(post_router)
