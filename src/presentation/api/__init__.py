"""HTTP surface: versioned routers and request middleware."""
