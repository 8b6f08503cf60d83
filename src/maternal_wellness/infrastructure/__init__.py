"""Infrastructure layer: structured logging and privacy-safe identifiers."""
