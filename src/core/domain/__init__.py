"""Domain models and value types.

Why:
- Pure, strict data structures (Pydantic v2 + a SemVer value type).
- The domain knows nothing about HTTP, cargo or the CLI.
"""
