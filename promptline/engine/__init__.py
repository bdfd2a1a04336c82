"""Prompt engine: the ask/select loop and its decision tables."""

from promptline.engine.policy import Outcome, PromptState, evaluate_answer, evaluate_choice
from promptline.engine.ui import UI, render_instruction

__all__ = [
    "Outcome",
    "PromptState",
    "UI",
    "evaluate_answer",
    "evaluate_choice",
    "render_instruction",
]
