"""
API module - backend FastAPI dla overlayu debugowego i zapytań zdalnych.
"""
