"""
Services Module

Domain logic shared by the routers:
- accounts: registration, login, user management and role changes
- catalog: category / brand / product lookups and response shaping
- images: catalog image storage with reference-counted cleanup
"""
