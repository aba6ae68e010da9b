# furniture_store/services/images.py
"""
Catalog image storage.

Images are stored once per file name under <media_root>/<upload_dir> and
referenced by relative path ("uploads/sofa.png") from Category and Product
records. Several records may share one file, so a file is only removed once
no live record points at it any more.

Mutation order used by the routers:
    1. save the upload (or reuse an existing file with the same name)
    2. persist the record with its new image path
    3. schedule release(old_path) as a background task
release() re-checks references and unlinks the file only if it is orphaned.
"""
import logging
import uuid
from pathlib import Path

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from furniture_store.config import settings
from furniture_store.core.errors import Unexpected, ValidationFailed
from furniture_store.models.category import Category
from furniture_store.models.product import Product

logger = logging.getLogger("uvicorn.error")

ALLOWED_IMAGE_TYPES = {"image/jpeg", "image/png", "image/webp", "image/gif"}


class ImageStore:
    def __init__(self, media_root: str | Path, upload_dir: str = "uploads"):
        self.media_root = Path(media_root)
        self.upload_dir = upload_dir.strip("/")

    @property
    def directory(self) -> Path:
        return self.media_root / self.upload_dir

    def ensure_directory(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)

    def absolute(self, path: str) -> Path:
        return self.media_root / path

    def is_upload_path(self, path: str | None) -> bool:
        """Only "<upload_dir>/<name>" paths are ever read or deleted."""
        if not path:
            return False
        p = Path(path)
        return len(p.parts) == 2 and p.parts[0] == self.upload_dir and p.name not in ("", ".", "..")

    def exists(self, path: str | None) -> bool:
        return self.is_upload_path(path) and self.absolute(path).is_file()

    async def save(self, upload: UploadFile) -> str:
        """
        Store an uploaded image and return its relative path.

        The stored name is the upload's base name. When a file with that name
        is already present it is reused as-is and nothing is written.

        Raises:
            ValidationFailed: missing file name or unsupported content type
            Unexpected: the file could not be written
        """
        filename = Path(upload.filename or "").name
        if filename in ("", ".", ".."):
            raise ValidationFailed("Image file name is required", code="INVALID_IMAGE")
        if upload.content_type not in ALLOWED_IMAGE_TYPES:
            raise ValidationFailed("Invalid file type", code="INVALID_IMAGE")

        relative = f"{self.upload_dir}/{filename}"
        target = self.absolute(relative)
        try:
            if target.is_file():
                logger.info("[images] reusing existing file %s", relative)
                return relative
            self.ensure_directory()
            data = await upload.read()
            await run_in_threadpool(target.write_bytes, data)
        except OSError as exc:
            raise Unexpected(f"File save error: {exc}") from exc
        finally:
            await upload.close()
        logger.info("[images] stored %s (%d bytes)", relative, len(data))
        return relative

    async def is_referenced(
        self,
        path: str,
        exclude_category_id: uuid.UUID | None = None,
        exclude_product_id: uuid.UUID | None = None,
    ) -> bool:
        """True if any live category or product (other than the excluded ones) uses path."""
        categories = Category.filter(image=path)
        if exclude_category_id is not None:
            categories = categories.exclude(id=exclude_category_id)
        if await categories.exists():
            return True
        products = Product.filter(image=path)
        if exclude_product_id is not None:
            products = products.exclude(id=exclude_product_id)
        return await products.exists()

    async def release(
        self,
        path: str | None,
        exclude_category_id: uuid.UUID | None = None,
        exclude_product_id: uuid.UUID | None = None,
    ) -> bool:
        """
        Delete the file at path unless a record still references it.

        Runs after the owning record change is committed. Filesystem errors are
        logged and swallowed; the API response has already been decided.

        Returns:
            True if a file was removed
        """
        if not self.is_upload_path(path):
            return False
        if await self.is_referenced(path, exclude_category_id, exclude_product_id):
            logger.info("[images] %s still referenced, keeping it", path)
            return False
        try:
            self.absolute(path).unlink()
        except FileNotFoundError:
            logger.warning("[images] %s already missing from storage", path)
            return False
        except OSError as exc:
            logger.warning("[images] error deleting %s: %s", path, exc)
            return False
        logger.info("[images] deleted orphaned image %s", path)
        return True


image_store = ImageStore(settings.media_root, settings.upload_dir)
