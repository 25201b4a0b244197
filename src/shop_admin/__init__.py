"""Shop Admin: storefront administration API (auth, catalog, analytics)."""
