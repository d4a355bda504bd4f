"""Utility functions and tools used across the larvtx package.

- `logger`: Logging utilities and configuration
- `factory`: Generic name-to-class registry and instantiation helpers
- `enums`: Enumerated types shared across the package (readout views)
"""
