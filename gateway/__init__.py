"""Object gateway: presigned-URL access to an S3-compatible store with tenant-scoped keys."""
