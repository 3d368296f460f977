"""Routing: prefix tree of path patterns with parameter capture.

Patterns are registered in bulk from specs and resolved against runtime
paths in O(path-depth).
"""
