"""
Authentication: bearer tokens, registration/login and password resets.
"""
