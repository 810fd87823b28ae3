"""
Info card categories.
"""
