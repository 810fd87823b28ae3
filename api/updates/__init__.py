"""
Updates feed (announcements with badges).
"""
