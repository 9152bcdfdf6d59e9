import logging
from functools import lru_cache

from fastapi import Depends, FastAPI, Query, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from resizer import __version__
from resizer.config import Settings, get_settings
from resizer.middleware import request_context_middleware
from resizer.processor import ImageTransformer, PillowTransformer
from resizer.service import handle_request
from resizer.storage import ObjectStore, S3ObjectStore

logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(name)s: %(message)s")
logging.getLogger("botocore").setLevel(logging.WARNING)


# ── OpenAPI metadata ──────────────────────────────────────────────────────────

_DESCRIPTION = """
## Image Resizer

Serves images from an S3 bucket at any size, generating each variant on first
request and storing it for the next one.

* **options** — `<width|auto>x<height|auto>[_<fit>]`, fit one of
  `cover` (default), `contain`, `fill`, `inside`, `outside`.
* **response** — `file` for the image itself, `json` (default) for
  `{"resized": bool, "exists": bool}`.

Images are never enlarged beyond their original size.

The `health`, `docs`, `redoc` and `openapi.json` paths belong to the service
itself, so objects stored at those top-level keys are not reachable here.

### Error shape
Errors are plain text.
"""


# ── Health schema ─────────────────────────────────────────────────────────────

class HealthResponse(BaseModel):
    status: str
    service: str


# ── Dependencies ──────────────────────────────────────────────────────────────

@lru_cache
def get_store() -> ObjectStore:
    return S3ObjectStore.from_settings(get_settings())


@lru_cache
def get_transformer() -> ImageTransformer:
    return PillowTransformer(jpeg_quality=get_settings().jpeg_quality)


# ── App factory ───────────────────────────────────────────────────────────────

def create_app() -> FastAPI:
    settings = get_settings()
    logging.getLogger().setLevel(settings.log_level)

    app = FastAPI(
        title="Image Resizer",
        version=__version__,
        description=_DESCRIPTION,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Middleware (applied in reverse-registration order: last added = outermost)
    app.middleware("http")(request_context_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["GET"],
        allow_headers=["*"],
        max_age=600,
    )

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", service="resizer")

    # Store and Pillow calls block; sync endpoints run in the threadpool
    @app.get(
        "/{key:path}",
        tags=["images"],
        summary="Serve an image variant",
        response_class=Response,
    )
    def serve_image(
        key: str,
        options: str | None = Query(default=None, description="<w|auto>x<h|auto>[_<fit>]"),
        response: str | None = Query(default=None, description="file or json"),
        store: ObjectStore = Depends(get_store),
        transformer: ImageTransformer = Depends(get_transformer),
        settings: Settings = Depends(get_settings),
    ) -> Response:
        result = handle_request(
            key,
            options,
            response,
            store=store,
            transformer=transformer,
            settings=settings,
        )
        return Response(
            content=result.raw_body(),
            status_code=result.status_code,
            headers=result.headers,
        )

    return app


app = create_app()
