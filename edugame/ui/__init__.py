"""NiceGUI web interface for the AI doubt solver.

Pages:
    - /: Subject-aware tutor chat with live streamed answers
"""

from edugame.ui.chat_page import register_pages

__all__ = ["register_pages"]
