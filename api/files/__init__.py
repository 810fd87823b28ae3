"""
Folder tree and learning items.
"""
