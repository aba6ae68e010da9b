# furniture_store/models/category.py
import uuid
from tortoise import fields, models

class Category(models.Model):
    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    name = fields.CharField(max_length=100, index=True)  # Unique case-insensitively (checked by the router)
    image = fields.CharField(max_length=512, null=True)  # Relative path under the upload dir, e.g. "uploads/sofa.png"

    class Meta:
        table = "categories"
