"""
Adapter layer for the Portfolio API.

Contains the media storage adapters (local directory / S3) selected by deployment mode.
"""
