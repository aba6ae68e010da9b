# furniture_store/core/__init__.py
"""
Core application modules.
Contains essential infrastructure components:
- bootstrap: Default admin creation and startup repairs
- db: Database configuration and connection management
- errors: Application error types mapped to HTTP responses
- principals: Resolving token subjects to users and admins
- security: Password hashing and access/refresh token handling
"""
