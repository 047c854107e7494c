"""
convention_check — lint JSON-Schema / OpenAPI documents against API
naming conventions (Money objects, generic fields, reference fields,
address structures).
"""

from convention_check.checker import ConventionChecker, InvalidDocumentError, check
from convention_check.config import APP_VERSION as __version__
from convention_check.models import Finding

__all__ = ["ConventionChecker", "InvalidDocumentError", "Finding", "check", "__version__"]
