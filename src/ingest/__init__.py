"""Review ingestion pipeline.

This package decodes storage notifications, parses uploaded review
files, and hands validated records to the record store.
"""
