"""
Business rules that sit between routers and repositories.
"""
