# furniture_store/services/catalog.py
"""
Lookups and response shaping shared by the catalog routers.
"""
from furniture_store.core.errors import NotFound
from furniture_store.core.ids import parse_uuid
from furniture_store.models.brand import Brand
from furniture_store.models.category import Category
from furniture_store.models.product import Product


class CategoryNotFound(NotFound):
    code = "CATEGORY_NOT_FOUND"
    message = "Category not found"


class BrandNotFound(NotFound):
    code = "BRAND_NOT_FOUND"
    message = "Brand not found"


class ProductNotFound(NotFound):
    code = "PRODUCT_NOT_FOUND"
    message = "Product not found"


async def _get(model, raw_id, error):
    pk = parse_uuid(raw_id)
    obj = await model.get_or_none(id=pk) if pk else None
    if obj is None:
        raise error()
    return obj


async def get_category(category_id) -> Category:
    return await _get(Category, category_id, CategoryNotFound)


async def get_brand(brand_id) -> Brand:
    return await _get(Brand, brand_id, BrandNotFound)


async def get_product(product_id) -> Product:
    return await _get(Product, product_id, ProductNotFound)


def category_to_dict(c: Category) -> dict:
    return {"_id": str(c.id), "name": c.name, "image": c.image}


def brand_to_dict(b: Brand) -> dict:
    return {"_id": str(b.id), "name": b.name, "description": b.description}


async def product_to_dict(p: Product) -> dict:
    """Serialize a product with its category and brand expanded."""
    await p.fetch_related("category", "brand")
    return {
        "_id": str(p.id),
        "name": p.name,
        "price": p.price,
        "oldprice": p.old_price,
        "description": p.description,
        "material": p.material,
        "category": category_to_dict(p.category),
        "brand": brand_to_dict(p.brand),
        "image": p.image,
        "updateDate": p.update_date.isoformat() if p.update_date else "",
    }
