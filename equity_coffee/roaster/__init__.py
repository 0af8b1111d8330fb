"""
Contracts and roaster green-coffee inventory.
"""
