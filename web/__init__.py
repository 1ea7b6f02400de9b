"""
HTTP surface of the UGC intake API.
"""
