"""Infrastructure layer: concrete adapters for the application ports."""
