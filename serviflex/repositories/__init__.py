"""
Repository layer for data access.

Provides data access abstractions following the Repository pattern,
isolating Firestore access from business logic.
"""
