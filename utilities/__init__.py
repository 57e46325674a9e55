"""
Shared utilities for the Library API.

This package contains:
- Structured logging setup
"""
