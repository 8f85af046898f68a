"""Request and response helpers for FastAPI / Starlette handlers."""
