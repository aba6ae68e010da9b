# furniture_store/models/admin.py
import uuid
from tortoise import fields, models

class Admin(models.Model):
    """
    Administrator account.

    Same shape as User but kept in a separate table; role is always "admin".
    A promoted user keeps its original id here.
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    name = fields.CharField(max_length=50)
    email = fields.CharField(max_length=255, unique=True, index=True)
    password_hash = fields.CharField(max_length=1024)
    role = fields.CharField(max_length=16, default="admin")
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "admins"
