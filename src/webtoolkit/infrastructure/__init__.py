"""Infrastructure layer: ASGI request/response adapters and HTTP clients."""
