"""Domain models and constants.

- Pure data: wizard state, URL parts, enum selectors and route builders.
- The domain knows nothing about the CLI or the navigation backend.
"""
