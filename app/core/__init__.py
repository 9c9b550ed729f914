"""
Core Application - Infrastructure & Base Classes

Generic, reusable building blocks for the domain apps. No domain logic
lives here.

Models (import from core.models):
    - BaseModel: Abstract model with timestamps (created_at, updated_at)

Model Mixins (import from core.model_mixins):
    - ValidationCallbacksMixin: Validate on save, send post_validation
    - OrmShimMixin: find / find_by / to_key lookup helpers

Signals (import from core.signals):
    - post_validation: Sent after every full_clean(), valid or not

Services (import from core.services):
    - BaseService: Base class for service layer
    - ServiceResult: Standard result wrapper for success/failure handling

Exceptions (import from core.exceptions):
    - BaseApplicationError: Base exception with error codes
    - CascadeDeleteError: Owned child records could not be deleted

Helpers (import from core.helpers):
    - generate_token: Cryptographically secure token generation
    - get_client_ip: Client IP extraction from request

Note:
    Django models and model mixins are NOT imported here to avoid
    AppRegistryNotReady errors. Import them directly from their modules.
"""

from .exceptions import BaseApplicationError, CascadeDeleteError
from .helpers import generate_token, get_client_ip

__all__ = [
    # Exceptions
    "BaseApplicationError",
    "CascadeDeleteError",
    # Helpers
    "generate_token",
    "get_client_ip",
]
