"""
Database models module initialization.
Exports all database models for convenient imports throughout the application.

Models exported:
- User: Customer account
- Admin: Administrator account (separate table)
- Category, Brand, Product: Catalog entities
- RoleChangeRepair: Promotions left half-applied, pending reconciliation
"""
from .user import User
from .admin import Admin
from .category import Category
from .brand import Brand
from .product import Product
from .role_change_repair import RoleChangeRepair
