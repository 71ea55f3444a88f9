from __future__ import annotations


class ReqhintError(Exception):
    """Base class for everything raised by reqhint."""


class DescriptorError(ReqhintError):
    """Raised when a request or handler cannot be turned into a descriptor."""
