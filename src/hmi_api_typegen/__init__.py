"""Generate TypeScript declarations for XML interface descriptions."""
