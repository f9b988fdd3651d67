"""Application layer: DTOs, service results and application services."""
