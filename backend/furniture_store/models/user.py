# furniture_store/models/user.py
"""
Database model for customer accounts.
Regular shoppers live here; admins live in their own table (see admin.py).
"""
import uuid
from tortoise import fields, models

class User(models.Model):
    """
    User database model.

    Security:
    - Password is stored as a hash (never store plain text passwords)
    - Email must be unique across all users
    - Role is "user" for every live record; promotion to admin moves the
      account into the Admin table under the same id
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)  # Primary key: unique user identifier
    name = fields.CharField(max_length=50)  # Display name (3-50 chars, validated by schemas)
    email = fields.CharField(max_length=255, unique=True, index=True)  # Login email (unique, indexed for lookups)
    password_hash = fields.CharField(max_length=1024)  # Hashed password (argon2)
    role = fields.CharField(max_length=16, default="user")  # "user" (default) or "admin"
    created_at = fields.DatetimeField(auto_now_add=True)  # Timestamp when account was created

    class Meta:
        """Tortoise ORM metadata configuration."""
        table = "users"
