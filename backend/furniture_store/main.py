# furniture_store/main.py
import logging

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from furniture_store.config import settings
from furniture_store.core.db import init_db, close_db
from furniture_store.core.errors import AppError
from furniture_store.core.bootstrap import run_startup_tasks
from furniture_store.services.images import image_store

from furniture_store.api.v1.routers import auth, users, categories, brands, products

logger = logging.getLogger("uvicorn.error")

app = FastAPI(title=settings.APP_NAME)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["x-auth-token", "x-refresh-token"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error("[api] %s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.to_detail()})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    # Malformed input is a 400, same as the other validation failures
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": {
            "code": "VALIDATION_FAILED",
            "message": "Invalid request",
            "errors": jsonable_encoder(exc.errors()),
        }},
    )


@app.on_event("startup")
async def on_startup():
    image_store.ensure_directory()
    # Tables are created directly only in dev; elsewhere use Aerich migrations
    await init_db(generate_schemas=settings.env == "dev")
    await run_startup_tasks()


@app.on_event("shutdown")
async def on_shutdown():
    await close_db()


# REST
app.include_router(auth.router, prefix=settings.api_prefix)
app.include_router(users.router, prefix=settings.api_prefix)
app.include_router(categories.router, prefix=settings.api_prefix)
app.include_router(brands.router, prefix=settings.api_prefix)
app.include_router(products.router, prefix=settings.api_prefix)

# Uploaded catalog images
app.mount(
    f"/{image_store.upload_dir}",
    StaticFiles(directory=str(image_store.directory), check_dir=False),
    name="uploads",
)


@app.get("/healthz")
def healthz():
    return {"ok": True}


def run():
    """Serve the app with uvicorn on the configured HOST / PORT."""
    uvicorn.run("furniture_store.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
