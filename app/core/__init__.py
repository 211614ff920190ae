"""Core gameplay primitives (board rules, the engine, and state text).

Kept free of FastAPI and Redis concerns so it can be reused by API routes and tests.
"""
