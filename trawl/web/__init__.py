"""Web interface for trawl.

Usage:
    trawl serve --port 8000

Or directly with uvicorn:
    uvicorn trawl.web.app:create_app --factory
"""
