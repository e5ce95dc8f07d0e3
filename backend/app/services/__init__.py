# Services package init
"""
WoofPoint Backend — Services Layer
====================================

Business logic between routes (HTTP) and models (persistence). Every method
takes the AsyncSession as an argument, so services hold no per-request state
and are exposed as module-level singletons.

Service Inventory:
    - AuthService:              signup, login, logout, profile-photo upload
    - ProfileService:           owner/trainer profile read + update (user + role profile)
    - DogService:               add / patch / delete entries in an owner's dog list
    - TrainerDirectoryService:  owner-facing trainer list and detail page
    - StorageService:           S3 upload and signed-URL resolution
"""
