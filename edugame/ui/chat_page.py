"""NiceGUI doubt-solver page with live streamed answers."""

import logging
from datetime import datetime

from nicegui import ui
from pydantic import ValidationError

from edugame.client.doubt_solver import DoubtSolverClient
from edugame.client.errors import ChatRequestError
from edugame.models.schemas import (
    MAX_HISTORY_MESSAGES,
    MAX_QUESTION_LENGTH,
    ChatMessage,
    DoubtRequest,
    Subject,
)
from edugame.session.context import SessionManager

logger = logging.getLogger(__name__)

SUBJECT_LABELS = {
    Subject.COMPUTER_SCIENCE: "Computer Science",
    Subject.STEM: "STEM",
    Subject.HUMANITIES: "Humanities",
}

CUSTOM_CSS = """
<style>
    body { background: #f5f5f5; min-height: 100vh; }

    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        overflow: hidden;
    }

    .header { background: linear-gradient(135deg, #f59e0b 0%, #8b5cf6 100%); }

    .message-user {
        background: #8b5cf6;
        color: white;
        border-radius: 18px 18px 4px 18px;
    }

    .message-assistant {
        background: #f3f4f6;
        color: #1f2937;
        border-radius: 18px 18px 18px 4px;
    }
</style>
"""


class DoubtSession:
    """Conversation state of one open doubt-solver page.

    The transcript keeps every turn in full; the function's length limits are
    applied only when history is sent with the next question.
    """

    def __init__(self) -> None:
        self.messages: list[dict] = []
        self.subject: Subject = Subject.COMPUTER_SCIENCE
        self.is_streaming: bool = False

    def build_request(self, question: str) -> DoubtRequest:
        """Create the request for a new question, sending the latest turns as history."""
        history = [
            ChatMessage(role=msg["role"], content=msg["content"][:MAX_QUESTION_LENGTH])
            for msg in self.messages[-MAX_HISTORY_MESSAGES:]
        ]
        return DoubtRequest(question=question, subject=self.subject, conversation_history=history)

    def add_message(self, role: str, content: str) -> None:
        self.messages.append({"role": role, "content": content})

    def reset(self) -> None:
        self.messages.clear()
        self.is_streaming = False


def client_for(sessions: SessionManager) -> DoubtSolverClient:
    """Build a client authorized as the signed-in user, else with the publishable key."""
    return DoubtSolverClient(session=sessions.current if sessions.is_signed_in else None)


def register_pages(sessions: SessionManager) -> None:
    """Register the doubt-solver page against the application's session manager."""

    @ui.page("/")
    def doubt_solver_page() -> None:
        """AI tutor chat page."""
        ui.add_head_html(CUSTOM_CSS)
        session = DoubtSession()

        messages_container: ui.column
        input_field: ui.textarea
        send_btn: ui.button

        def render_message(role: str, content: str) -> ui.markdown:
            is_user = role == "user"
            align = "justify-end" if is_user else "justify-start"
            bubble = "message-user" if is_user else "message-assistant"
            with ui.row().classes(f"w-full {align}"):
                with ui.element("div").classes(f"max-w-[75%] px-4 py-3 {bubble}"):
                    return ui.markdown(content).classes("text-sm")

        def refresh_messages() -> None:
            messages_container.clear()
            with messages_container:
                if not session.messages:
                    with ui.column().classes("w-full h-64 items-center justify-center gap-3"):
                        ui.icon("psychology").classes("text-5xl text-gray-300")
                        ui.label("Ask any question about your studies").classes(
                            "text-lg text-gray-400"
                        )
                for msg in session.messages:
                    render_message(msg["role"], msg["content"])

        async def send_message() -> None:
            text = (input_field.value or "").strip()
            if not text or session.is_streaming:
                return

            try:
                request = session.build_request(text)
            except ValidationError as e:
                ui.notify(e.errors()[0]["msg"], type="warning")
                return

            input_field.value = ""
            session.is_streaming = True
            send_btn.disable()

            session.add_message("user", text)
            refresh_messages()
            with messages_container:
                answer_view = render_message("assistant", "_Thinking..._")

            def on_delta(delta: str, accumulated: str) -> None:
                answer_view.set_content(accumulated)

            started = datetime.now()
            try:
                answer = await client_for(sessions).ask(request, on_delta=on_delta)
            except (ChatRequestError, ValueError) as e:
                logger.warning(f"Doubt solver request failed: {e}")
                session.messages.pop()
                refresh_messages()
                input_field.value = text
                ui.notify(str(e), type="negative")
            else:
                session.add_message("assistant", answer)
                refresh_messages()
                elapsed = (datetime.now() - started).total_seconds()
                logger.debug(f"Answer streamed in {elapsed:.1f}s")
            finally:
                session.is_streaming = False
                send_btn.enable()

        def new_chat() -> None:
            if session.is_streaming:
                return
            session.reset()
            refresh_messages()

        def change_subject(e) -> None:
            session.subject = Subject(e.value)

        # === UI Layout ===
        with (
            ui.element("div").classes("w-full min-h-screen p-4 md:p-8"),
            ui.column().classes("w-full max-w-3xl mx-auto app-container").style(
                "height: calc(100vh - 4rem)"
            ),
        ):
            # Header
            with ui.row().classes("w-full header px-5 py-4 items-center justify-between"):
                with ui.row().classes("items-center gap-3"):
                    ui.icon("auto_awesome").classes("text-white text-3xl")
                    ui.label("AI Doubt Solver").classes("text-lg font-semibold text-white")
                with ui.row().classes("items-center gap-3"):
                    ui.select(
                        {subject.value: label for subject, label in SUBJECT_LABELS.items()},
                        value=session.subject.value,
                        on_change=change_subject,
                    ).props("dense outlined bg-color=white").classes("w-44")
                    ui.button(icon="restart_alt", on_click=new_chat).props(
                        "flat round color=white"
                    )

            # Messages
            with (
                ui.scroll_area().classes("flex-grow w-full bg-gray-50"),
                ui.column().classes("w-full p-5"),
            ):
                messages_container = ui.column().classes("w-full gap-4")
                refresh_messages()

            # Input
            with ui.row().classes("w-full p-4 gap-3 items-end bg-white border-t"):
                input_field = (
                    ui.textarea(placeholder="Ask your question...")
                    .props("autogrow outlined dense rows=1")
                    .classes("flex-grow")
                    .on("keydown.enter.prevent", send_message)
                )
                send_btn = ui.button(icon="send", on_click=send_message).props(
                    "round unelevated color=deep-purple"
                )
