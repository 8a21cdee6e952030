"""Core: configuration, lifespan, and exception handling wiring."""
