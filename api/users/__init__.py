"""
Account administration.
"""
