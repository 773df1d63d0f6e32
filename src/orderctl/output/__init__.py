"""Output layer — renders ServiceResult as JSON, quiet IDs, or Rich text."""
