# furniture_store/schemas/catalog.py
"""
Pydantic schemas for catalog endpoints (categories, brands, products).
Categories and products are submitted as multipart forms because they can
carry an image, so only brands have a JSON input model.
"""
from typing import Optional
from pydantic import BaseModel, Field


class BrandIn(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = None


class BrandOut(BaseModel):
    id: str = Field(alias="_id")
    name: str
    description: Optional[str] = None

    class Config:
        populate_by_name = True


class CategoryOut(BaseModel):
    id: str = Field(alias="_id")
    name: str
    image: Optional[str] = None  # Relative path, served under /uploads

    class Config:
        populate_by_name = True


class ProductOut(BaseModel):
    """
    Product as returned by the API, with category and brand expanded.
    """
    id: str = Field(alias="_id")
    name: str
    price: float
    oldprice: float  # Price before discount
    description: Optional[str] = None
    material: str
    category: CategoryOut
    brand: BrandOut
    image: Optional[str] = None
    updateDate: str  # ISO timestamp of the last change

    class Config:
        populate_by_name = True
