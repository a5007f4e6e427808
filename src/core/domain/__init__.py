"""Domain models and entities.

Why:
- Pure, strict data structures (Pydantic v2) live here.
- The domain knows nothing about HTTP, the CLI or files: only the control
  plane vocabulary and its lifecycle rules.
"""
