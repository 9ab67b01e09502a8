"""Field-level JSON encoding and HMAC signing service."""

__version__ = "1.0.0"
