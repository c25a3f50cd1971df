"""Test package for EduGame.

Structure:
    - unit/: Decoder, gamification, session, config and schema tests
    - integration/: API endpoints and the doubt-solver client over HTTP

Outbound calls go through httpx.MockTransport; API tests use ASGITransport.
Leverages pytest with pytest-check for soft assertions.
"""
