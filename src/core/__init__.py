"""Core of the control plane resource model.

Why:
- Holds the domain (models, enumerations, errors), the codec and settings.
- Knows nothing about the CLI; adapters depend on the core, never the reverse.
"""
