"""
Educator prototype endpoints.
"""
