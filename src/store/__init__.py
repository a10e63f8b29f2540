"""Storage and versioning layer.

This module persists content-addressed blobs and linear commit chains.
It powers head lookups, conditional commits, and history listing.
"""
