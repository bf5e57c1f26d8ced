"""Core interfaces.

- Protocol contracts implemented by adapters (navigation, template lookups).
- Services depend on these abstractions, never on a concrete router.
"""
