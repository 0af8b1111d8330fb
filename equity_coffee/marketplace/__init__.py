"""
Public marketplace listing of published lots.
"""
