# furniture_store/models/brand.py
import uuid
from tortoise import fields, models

class Brand(models.Model):
    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    name = fields.CharField(max_length=100)
    description = fields.TextField(null=True)

    class Meta:
        table = "brands"
