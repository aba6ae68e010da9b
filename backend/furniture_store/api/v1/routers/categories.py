# furniture_store/api/v1/routers/categories.py
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, File, Form, UploadFile, status
from tortoise.exceptions import BaseORMException

from furniture_store.api.v1.deps import get_image_store, require_admin
from furniture_store.core.errors import Unexpected, ValidationFailed
from furniture_store.models.category import Category
from furniture_store.models.product import Product
from furniture_store.schemas.catalog import CategoryOut
from furniture_store.services import catalog
from furniture_store.services.images import ImageStore

router = APIRouter(prefix="/category", tags=["category"])


def _clean_name(name: str) -> str:
    name = name.strip()
    if not 1 <= len(name) <= 100:
        raise ValidationFailed("Category name must be 1-100 characters")
    return name


async def _ensure_unique_name(name: str, exclude_id=None) -> None:
    qs = Category.filter(name__iexact=name)
    if exclude_id is not None:
        qs = qs.exclude(id=exclude_id)
    if await qs.exists():
        raise ValidationFailed("This category name already exists", code="CATEGORY_EXISTS")


@router.get("", response_model=list[CategoryOut])
async def list_categories():
    return [catalog.category_to_dict(c) for c in await Category.all().order_by("name")]


@router.get("/{category_id}", response_model=CategoryOut)
async def get_category(category_id: str):
    return catalog.category_to_dict(await catalog.get_category(category_id))


@router.post(
    "",
    response_model=CategoryOut,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_category(
    name: str = Form(...),
    image: Optional[UploadFile] = File(None),
    store: ImageStore = Depends(get_image_store),
):
    """
    Create a category (admin only, multipart form).

    The name must be unique ignoring case. An uploaded image whose file name
    already exists in storage is reused instead of being written again.
    """
    name = _clean_name(name)
    await _ensure_unique_name(name)
    image_path = await store.save(image) if image is not None and image.filename else None
    try:
        category = await Category.create(name=name, image=image_path)
    except BaseORMException as exc:
        # Nothing points at a freshly stored image yet
        await store.release(image_path)
        raise Unexpected(f"Could not save category: {exc}") from exc
    return catalog.category_to_dict(category)


@router.put("/{category_id}", response_model=CategoryOut, dependencies=[Depends(require_admin)])
async def update_category(
    category_id: str,
    background_tasks: BackgroundTasks,
    name: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    store: ImageStore = Depends(get_image_store),
):
    """
    Rename a category and/or replace its image (admin only).

    The record is saved with the new image first; the old file is removed
    afterwards in the background, and only if nothing else references it.
    """
    category = await catalog.get_category(category_id)
    if name is not None:
        name = _clean_name(name)
        await _ensure_unique_name(name, exclude_id=category.id)
        category.name = name

    old_image = category.image
    if image is not None and image.filename:
        category.image = await store.save(image)
    await category.save()

    if old_image and old_image != category.image:
        background_tasks.add_task(store.release, old_image, exclude_category_id=category.id)
    return catalog.category_to_dict(category)


@router.delete("/{category_id}", dependencies=[Depends(require_admin)])
async def delete_category(
    category_id: str,
    background_tasks: BackgroundTasks,
    store: ImageStore = Depends(get_image_store),
):
    """
    Delete a category (admin only). Refused while products still belong to it.
    """
    category = await catalog.get_category(category_id)
    if await Product.filter(category_id=category.id).exists():
        raise ValidationFailed("Category still has products", code="CATEGORY_IN_USE")

    old_image = category.image
    await category.delete()
    if old_image:
        background_tasks.add_task(store.release, old_image)
    return {"message": "Category deleted successfully"}
