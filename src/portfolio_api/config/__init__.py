"""
Configuration management for the Portfolio API.

Contains Pydantic settings and the mode-aware choices (document store, media
storage) that follow from them across local-dev, aws-mock, and aws-prod.
"""
