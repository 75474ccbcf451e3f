"""HTTP API: DTOs, mappers, routers and application wiring."""
