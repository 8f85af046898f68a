"""Infrastructure services that talk to external systems."""
