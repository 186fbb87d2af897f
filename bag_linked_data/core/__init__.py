"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: CRS codes, namespace prefixes, CRS URI helper
- exceptions: Conversion error taxonomy
"""
