"""Content ingestion core.

This package reads bytes from stdin, files, or URLs, decides whether
they changed since the last commit, and commits them with provenance.
"""
