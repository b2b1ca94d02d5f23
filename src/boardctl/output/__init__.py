"""Output layer — render ServiceResult as Rich text, quiet ids, or JSON."""
