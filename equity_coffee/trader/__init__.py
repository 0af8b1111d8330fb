"""
Buyer offers on coffee lots.
"""
