"""Core application plumbing: configuration, errors, lifespan, middleware."""
