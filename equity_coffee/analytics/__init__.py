"""
User-action tracking and admin metrics.
"""
