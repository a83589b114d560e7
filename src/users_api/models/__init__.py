"""API models package."""

from users_api.models.envelope import Envelope, UserFields, error_envelope
from users_api.models.health import HealthCheckResponse

__all__ = ["Envelope", "HealthCheckResponse", "UserFields", "error_envelope"]
