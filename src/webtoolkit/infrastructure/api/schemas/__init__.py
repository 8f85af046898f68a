"""API schemas for response shapes."""

from webtoolkit.infrastructure.api.schemas.envelope_schemas import JSONEnvelope

__all__ = ["JSONEnvelope"]
