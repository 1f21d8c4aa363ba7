"""Purchase analytics service."""
