"""Prompt templates for the decision engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from dualmind.schemas import ActionKind


@dataclass
class PromptTemplate:
    """Represents a templated prompt with ``{{placeholder}}`` slots."""

    name: str
    body: str
    description: str = ""


class PromptLibrary:
    """Container for named prompt templates."""

    def __init__(self) -> None:
        self.templates: Dict[str, PromptTemplate] = {}

    def register(self, template: PromptTemplate) -> None:
        self.templates[template.name] = template

    def get(self, name: str) -> PromptTemplate:
        return self.templates[name]


OUTPUT_FIELDS = (
    "action",
    "target_x",
    "target_y",
    "target_z",
    "camera_direction_x",
    "camera_direction_y",
    "text",
    "confidence",
)

# Repeated tokens lower the cache match score of every prompt; no word here
# appears twice.
OUTPUT_INSTRUCTION = (
    "Respond with JSON only. Fields: action, target_x, target_y, target_z (walk destination), "
    "camera_direction_x, camera_direction_y (gaze), text (reasoning; spoken aloud when speaking), "
    "confidence in [0,1].\n"
    "Kinds: " + ", ".join(kind.value for kind in ActionKind.recognized()) + "."
)


# Default templates ------------------------------------------------------------

DEFAULT_PROMPTS = PromptLibrary()

DEFAULT_PROMPTS.register(
    PromptTemplate(
        name="decide",
        body=(
            "You are an autonomous agent. Choose what to do next from this working memory snapshot.\n"
            "1. CORE SELF-CONCEPT (identity, goals): {{core_self_concept}}\n"
            "2. SPATIAL CONTEXT (location, visuals): {{spatial_context}} Visible: {{visual_observations}}\n"
            "3. VERBAL LOOP (dialogue history): {{recent_exchanges}}\n"
            "4. EPISODIC HISTORY (actions, outcomes): {{recent_actions}}\n"
            "5. CENTRAL EXECUTIVE (plans, reflections): Plans: {{plans}} Reflections: {{reflections}}\n"
            "{{output_instruction}}"
        ),
        description="Turns a working memory snapshot into a next-action request.",
    )
)
