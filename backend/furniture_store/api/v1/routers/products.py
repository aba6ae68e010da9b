# furniture_store/api/v1/routers/products.py
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, File, Form, UploadFile, status
from tortoise.exceptions import BaseORMException

from furniture_store.api.v1.deps import get_image_store, require_admin
from furniture_store.core.errors import Unexpected
from furniture_store.models.product import Product
from furniture_store.schemas.catalog import ProductOut
from furniture_store.services import catalog
from furniture_store.services.images import ImageStore

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=list[ProductOut])
async def list_products():
    """
    Get all products with their category and brand expanded.
    """
    products = await Product.all().order_by("-update_date")
    return [await catalog.product_to_dict(p) for p in products]


@router.get("/{product_id}", response_model=ProductOut)
async def get_product(product_id: str):
    return await catalog.product_to_dict(await catalog.get_product(product_id))


@router.post(
    "",
    response_model=ProductOut,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_product(
    name: str = Form(...),
    price: float = Form(...),
    oldprice: float = Form(...),
    material: str = Form(...),
    category: str = Form(...),
    brand: str = Form(...),
    description: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    store: ImageStore = Depends(get_image_store),
):
    """
    Create a product (admin only, multipart form).

    Args:
        category / brand: ids of existing records
        image: optional upload; an existing file with the same name is reused

    Raises:
        NotFound (404): CATEGORY_NOT_FOUND / BRAND_NOT_FOUND
        ValidationFailed (400): INVALID_IMAGE for non-image uploads
    """
    cat = await catalog.get_category(category)
    br = await catalog.get_brand(brand)
    image_path = await store.save(image) if image is not None and image.filename else None
    try:
        product = await Product.create(
            name=name,
            price=price,
            old_price=oldprice,
            description=description,
            material=material,
            category=cat,
            brand=br,
            image=image_path,
        )
    except BaseORMException as exc:
        await store.release(image_path)
        raise Unexpected(f"Could not save product: {exc}") from exc
    return await catalog.product_to_dict(product)


@router.put("/{product_id}", response_model=ProductOut, dependencies=[Depends(require_admin)])
async def update_product(
    product_id: str,
    background_tasks: BackgroundTasks,
    name: Optional[str] = Form(None),
    price: Optional[float] = Form(None),
    oldprice: Optional[float] = Form(None),
    material: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    brand: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    imagePath: Optional[str] = Form(None),
    store: ImageStore = Depends(get_image_store),
):
    """
    Partially update a product (admin only, multipart form).

    Only submitted fields change. The image can be replaced by uploading a
    file, or switched to an already stored file by passing its path as
    imagePath (ignored if that file does not exist). The previous image is
    released in the background once the product is saved.
    """
    product = await catalog.get_product(product_id)
    if category is not None:
        product.category = await catalog.get_category(category)
    if brand is not None:
        product.brand = await catalog.get_brand(brand)

    if name is not None:
        product.name = name
    if price is not None:
        product.price = price
    if oldprice is not None:
        product.old_price = oldprice
    if material is not None:
        product.material = material
    if description is not None:
        product.description = description

    old_image = product.image
    if image is not None and image.filename:
        product.image = await store.save(image)
    elif imagePath and store.exists(imagePath):
        product.image = imagePath
    await product.save()

    if old_image and old_image != product.image:
        background_tasks.add_task(store.release, old_image, exclude_product_id=product.id)
    return await catalog.product_to_dict(product)


@router.delete("/{product_id}", dependencies=[Depends(require_admin)])
async def delete_product(
    product_id: str,
    background_tasks: BackgroundTasks,
    store: ImageStore = Depends(get_image_store),
):
    product = await catalog.get_product(product_id)
    old_image = product.image
    await product.delete()
    if old_image:
        background_tasks.add_task(store.release, old_image)
    return {"message": "Product deleted successfully"}
