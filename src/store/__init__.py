"""Storage collaborators.

This package wraps the object store and the review table behind the
small interfaces the ingestion coordinator depends on.
"""
