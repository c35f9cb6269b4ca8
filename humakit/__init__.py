"""Building blocks for HTTP APIs: routing, middleware, cookies, conditional requests, patching and casing."""

__version__ = "0.1.0"
__all__ = ["api", "autoconfig", "casing", "chain", "conditional", "cookies", "flow", "patch"]