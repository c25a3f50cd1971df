"""EduGame - gamified learning client for students and teachers.

Combines httpx for streaming AI tutor responses, FastAPI for the local API,
NiceGUI for visualization, and Pydantic for data validation.

Components:
    - streaming: Incremental decoder for chat-completion event streams
    - client: Doubt-solver function client and its configuration
    - gamification: XP, level and streak arithmetic
    - session: Signed-in user context
    - api: HTTP endpoints for health and progress
    - ui: Web interface for the doubt solver
    - models: Request/response schemas
"""

__version__ = "0.1.0"
