"""Service layer: business logic between the API routes and repositories."""
