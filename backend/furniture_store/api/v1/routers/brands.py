# furniture_store/api/v1/routers/brands.py
from fastapi import APIRouter, Depends, status

from furniture_store.api.v1.deps import require_admin
from furniture_store.core.errors import ValidationFailed
from furniture_store.models.brand import Brand
from furniture_store.models.product import Product
from furniture_store.schemas.catalog import BrandIn, BrandOut
from furniture_store.services import catalog

router = APIRouter(prefix="/brands", tags=["brands"])


@router.get("", response_model=list[BrandOut])
async def list_brands():
    return [catalog.brand_to_dict(b) for b in await Brand.all().order_by("name")]


@router.get("/{brand_id}", response_model=BrandOut)
async def get_brand(brand_id: str):
    return catalog.brand_to_dict(await catalog.get_brand(brand_id))


@router.post("", response_model=BrandOut, status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_admin)])
async def create_brand(body: BrandIn):
    brand = await Brand.create(name=body.name.strip(), description=body.description)
    return catalog.brand_to_dict(brand)


@router.put("/{brand_id}", response_model=BrandOut, dependencies=[Depends(require_admin)])
async def update_brand(brand_id: str, body: BrandIn):
    brand = await catalog.get_brand(brand_id)
    brand.name = body.name.strip()
    brand.description = body.description
    await brand.save()
    return catalog.brand_to_dict(brand)


@router.delete("/{brand_id}", dependencies=[Depends(require_admin)])
async def delete_brand(brand_id: str):
    """Delete a brand (admin only). Refused while products still use it."""
    brand = await catalog.get_brand(brand_id)
    if await Product.filter(brand_id=brand.id).exists():
        raise ValidationFailed("Brand still has products", code="BRAND_IN_USE")
    await brand.delete()
    return {"message": "Brand deleted successfully"}
