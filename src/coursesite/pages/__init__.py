"""
Standalone pages of the course site.
"""
