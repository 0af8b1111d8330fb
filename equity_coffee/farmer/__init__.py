"""
Farmer-owned coffee lots.
"""
