"""
HTTP middleware for request correlation and request logging.
"""
