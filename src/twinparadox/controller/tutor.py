"""
Physics Tutor Bridge
====================
Answers free-text questions about the diagram with a Gemini chat model.

The tutor is optional. Without an API key, or when the service fails, `ask`
returns a fixed message instead of raising, so the rest of the application
keeps working.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Literal, Sequence

from google import genai
from google.genai import types

from twinparadox import config
from twinparadox.model.parameters import SimulationParameters
from twinparadox.model.stages import Stage

logger = logging.getLogger(__name__)

UNAVAILABLE_MESSAGE = (
    "AI chat feature is not available. Please set the GEMINI_API_KEY environment "
    "variable to enable this feature."
)
ERROR_MESSAGE = "Sorry, I encountered an error communicating with the AI physics tutor."
EMPTY_MESSAGE = "I couldn't generate a response."
GREETING = "I'm your AI Physics Tutor. Confused about the graph? Ask me anything about the Twin Paradox!"

Role = Literal["user", "model"]


@dataclass(frozen=True)
class ChatMessage:
    role: Role
    text: str


# Cached client (thread-safe lazy init)
_client: genai.Client | None = None
_client_lock = threading.Lock()


def get_client() -> genai.Client | None:
    """Return a shared Gemini client, or None when no API key is configured."""
    global _client
    if _client is not None:
        return _client
    api_key = config.get_api_key()
    if not api_key:
        return None
    with _client_lock:
        if _client is None:
            _client = genai.Client(api_key=api_key)
            logger.info(f"Gemini client initialised (model: {config.GEMINI_MODEL}).")
    return _client


def system_instruction(params: SimulationParameters, stage: Stage) -> str:
    """Tutor persona plus the numbers currently on screen."""
    return (
        "You are an expert physics tutor specializing in Special Relativity.\n"
        "The user is interacting with a visualization of the Twin Paradox.\n"
        "\n"
        "Current Simulation Parameters:\n"
        f"- Distance to star: {params.distance} light years.\n"
        f"- Velocity of Alice (traveler): {params.velocity}c.\n"
        f"- Current Stage: {stage.name}.\n"
        "\n"
        "Calculated Values:\n"
        f"- Gamma Factor: {params.gamma}\n"
        f"- Bob's total elapsed time: {params.stationary_total_time:.2f} years.\n"
        f"- Alice's total elapsed time: {params.traveler_total_proper_time:.2f} years.\n"
        "\n"
        "Explain concepts simply but accurately. Focus on Time Dilation, Relativity of "
        "Simultaneity, and Minkowski Diagrams.\n"
        "Keep answers concise (under 150 words) unless asked for deep detail."
    )


def to_contents(history: Sequence[ChatMessage]) -> list[types.Content]:
    """
    Convert a transcript into Gemini chat history.

    A chat history has to open with a user turn, so leading model turns (the
    greeting) are dropped.
    """
    messages = list(history)
    while messages and messages[0].role == "model":
        messages.pop(0)
    return [
        types.Content(role=m.role, parts=[types.Part(text=m.text)])
        for m in messages
    ]


def ask(
    question: str,
    params: SimulationParameters,
    stage: Stage,
    history: Sequence[ChatMessage] = (),
) -> str:
    """
    Ask the tutor a question in the context of the current diagram.

    Args:
        question: The user's question.
        params: Parameters currently shown.
        stage: Stage currently shown.
        history: Earlier turns of the conversation, oldest first, without
            the new question.

    Returns:
        The answer text, or a fixed fallback message when the tutor is not
        configured or the request fails.
    """
    client = get_client()
    if client is None:
        logger.warning("Tutor requested but no API key is configured.")
        return UNAVAILABLE_MESSAGE

    try:
        chat = client.chats.create(
            model=config.GEMINI_MODEL,
            config=types.GenerateContentConfig(
                system_instruction=system_instruction(params, stage),
            ),
            history=to_contents(history),
        )
        response = chat.send_message(question)
    except Exception:
        logger.exception("Gemini API error")
        return ERROR_MESSAGE

    return response.text or EMPTY_MESSAGE
