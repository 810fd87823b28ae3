"""
Category-scoped link/info cards.
"""
