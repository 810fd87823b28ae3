"""
Generic table-keyed save/delete for older clients.
"""
