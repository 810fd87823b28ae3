"""
Client-side state, navigation and API access for the portal.
"""
