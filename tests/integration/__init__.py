"""Integration tests for components working together.

Coverage:
    - API endpoints with real HTTP requests against the ASGI app
    - Doubt-solver client streaming through a mocked backend function
"""
