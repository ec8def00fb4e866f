"""GraphQL CRUD API over a single User entity."""

__version__ = "1.0.0"
