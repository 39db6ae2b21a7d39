# Shared module for modular monolith architecture
#
# This module contains common utilities shared across all modules:
# - exceptions.py: Base exceptions and custom exception handler
# - responses.py: Success envelope and pagination helpers
# - permissions.py: Role based DRF permission classes
# - utils.py: Slug and money helpers
# - cache.py: Redis cache utilities
# - storage.py: S3/MinIO storage for payment proofs
# - health/: Health check endpoints
