"""Output layer: render ServiceResult as JSON, quiet or Rich text."""
