"""User accounts, password hashing and JWT bearer authentication."""
