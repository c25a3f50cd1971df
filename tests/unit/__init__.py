"""Unit tests for individual components in isolation.

Coverage:
    - streaming/: Frame parsing, chunk boundaries, flush and sentinel
    - gamification/: Level thresholds, XP awards and streaks
    - session/: Sign-in and sign-out boundaries
    - client/: Configuration and error mapping

Leverages pytest-check for multiple assertions per test.
"""
