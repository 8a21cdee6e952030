"""Infrastructure layer: adapters for the object store and outbound HTTP."""
