"""
Signed-token and legacy Basic authentication.
"""
