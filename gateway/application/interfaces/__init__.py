"""Ports consumed by application use cases."""

from gateway.application.interfaces.storage import IObjectStorage, IUploadRelay

__all__ = ["IObjectStorage", "IUploadRelay"]
