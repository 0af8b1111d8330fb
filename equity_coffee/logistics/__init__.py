"""
Shipments tied to contracts.
"""
