# furniture_store/models/product.py
"""
Database model for catalog products.
Each product belongs to one category and one brand and may carry an image
path that can be shared with other products or categories.
"""
import uuid
from tortoise import fields, models

class Product(models.Model):
    """
    Product database model.

    Relationships:
    - Belongs to a Category (many-to-one, via related_name="products")
    - Belongs to a Brand (many-to-one, via related_name="products")

    Categories and brands that still have products cannot be deleted
    (enforced by their routers), hence RESTRICT.
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    name = fields.CharField(max_length=200)
    price = fields.FloatField()
    old_price = fields.FloatField()  # Price before discount, shown struck through
    description = fields.TextField(null=True)
    material = fields.CharField(max_length=100)
    category = fields.ForeignKeyField(
        "models.Category",
        related_name="products",
        on_delete=fields.RESTRICT,
    )
    brand = fields.ForeignKeyField(
        "models.Brand",
        related_name="products",
        on_delete=fields.RESTRICT,
    )
    image = fields.CharField(max_length=512, null=True)  # Relative path under the upload dir
    update_date = fields.DatetimeField(auto_now=True)  # Refreshed on every save

    class Meta:
        table = "products"
