"""FastAPI endpoints for EduGame.

Endpoints:
    - GET /health: Service health status
    - GET /progress/levels/{level}: XP threshold of a level
    - POST /progress/award: Award XP and update level and streak
    - POST/GET/DELETE /session: Sign in, inspect and sign out
"""

from edugame.api.app import app, create_app

__all__ = ["app", "create_app"]
