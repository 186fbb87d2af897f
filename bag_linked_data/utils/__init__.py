"""Shared helpers.

- sink: File / standard-output text sink for generated documents
"""
