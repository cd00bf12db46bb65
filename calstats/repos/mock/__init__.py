"""In-memory repositories for development and testing."""
