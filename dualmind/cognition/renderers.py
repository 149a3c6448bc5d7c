"""Prompt rendering utilities."""

from __future__ import annotations

from typing import Dict

from dualmind.memory import AgentWorkingMemory

from .prompts import DEFAULT_PROMPTS, OUTPUT_INSTRUCTION, PromptTemplate


def render_prompt(template: PromptTemplate, memory: AgentWorkingMemory) -> str:
    """Render a prompt template from a working memory snapshot.

    Performs simple placeholder replacement; the result is a pure function of
    the memory contents. Two snapshots with the same contents always render to
    the same text, which the fuzzy cache match depends on.

    Parameters
    ----------
    template:
        PromptTemplate to render.
    memory:
        Working memory snapshot. Read only; never mutated here.
    """

    # The summary already names the action kind
    episodic = "; ".join(record.outcome_summary for record in memory.recent_actions_and_outcomes)

    # Placeholders use {{double_brace}} syntax to avoid conflicts with JSON braces.
    replacements: Dict[str, str] = {
        "{{core_self_concept}}": "; ".join(memory.core_self_concept),
        "{{spatial_context}}": memory.current_spatial_context,
        "{{visual_observations}}": "; ".join(memory.recent_visual_observations),
        "{{recent_exchanges}}": "; ".join(memory.recent_exchanges),
        "{{recent_actions}}": episodic,
        "{{plans}}": "; ".join(memory.plans),
        "{{reflections}}": "; ".join(memory.reflections),
        "{{output_instruction}}": OUTPUT_INSTRUCTION,
    }

    rendered = template.body
    for placeholder, value in replacements.items():
        rendered = rendered.replace(placeholder, value)
    return rendered


def build_prompt(
    memory: AgentWorkingMemory,
    template: PromptTemplate | None = None,
) -> str:
    """Build the decision prompt for ``memory`` using ``template`` or the default."""

    return render_prompt(template or DEFAULT_PROMPTS.get("decide"), memory)
