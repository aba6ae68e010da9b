# furniture_store/models/role_change_repair.py
import uuid
from tortoise import fields, models

class RoleChangeRepair(models.Model):
    """
    A user -> admin promotion whose second step (deleting the user row) failed.

    Until resolved, the same account exists in both the users and the admins
    table. Startup reconciliation deletes the leftover user row and sets
    resolved_at.
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    principal_id = fields.UUIDField(index=True)  # Shared id of the User and Admin rows
    email = fields.CharField(max_length=255)
    reason = fields.TextField(null=True)  # Error text from the failed delete
    created_at = fields.DatetimeField(auto_now_add=True)
    resolved_at = fields.DatetimeField(null=True)

    class Meta:
        table = "role_change_repairs"
