"""Record storage layer.

This package keeps the portal's tables in memory, interprets statements
against them, and persists the table set to key/value storage.
"""
