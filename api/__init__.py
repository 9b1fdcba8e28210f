"""
API package - FastAPI backend nawigacji.
"""
