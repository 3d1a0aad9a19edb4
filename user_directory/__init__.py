"""User directory: CRUD REST service for users and their roles."""
