"""Product catalog CRUD."""
