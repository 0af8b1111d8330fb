"""
Inbound contact messages.
"""
