"""
Core infrastructure: configuration, logging, Firestore access and security.
"""
