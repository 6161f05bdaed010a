"""
Pydantic request/response schemas for the REST API.
"""
