"""
FastAPI RESTful API for the Library book catalog.

This module provides a small REST API for:
- Book catalog browsing and title search
- Creating, updating and deleting books by ISBN
- Request validation with field-level errors
- Optional API key-based authentication
"""
