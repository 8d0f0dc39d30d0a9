"""
Synthesis: ranked items → LearningPathResponse.

- roles: foundation / troubleshooting / progression selection
- playback: best timestamp offset for the primary pick
- messaging: fixed rationale, encouragement, tip and metric text
- framing: completion-backed introduction with a fixed fallback
- core: synthesize_learning_path
"""

from .core import build_primary, save_learning_path, synthesize_learning_path
from .framing import FALLBACK_FRAMING, build_framing_prompt, generate_framing
from .messaging import (
    encouragement_for,
    explain_primary_choice,
    fallback_response,
    metacognitive_tip,
    success_metric,
)
from .playback import select_playback_offset
from .roles import build_roles, select_foundation, select_progression, select_troubleshooting

__all__ = [
    "FALLBACK_FRAMING",
    "build_framing_prompt",
    "build_primary",
    "build_roles",
    "encouragement_for",
    "explain_primary_choice",
    "fallback_response",
    "generate_framing",
    "metacognitive_tip",
    "save_learning_path",
    "select_foundation",
    "select_playback_offset",
    "select_progression",
    "select_troubleshooting",
    "success_metric",
    "synthesize_learning_path",
]
