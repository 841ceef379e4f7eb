"""Static prompt template wrapped around the collected answers."""

from __future__ import annotations

from typing import Any, Mapping
import json

SYSTEM_PROMPT = (
    "You are a senior product designer and front-end engineer. Produce UI that is consistent, "
    "accessible, and production-viable. When asked for code, ensure it compiles."
)

USER_INSTRUCTION = (
    "Build UI for a project with the following context (JSON follows). "
    "Interpret missing values sensibly."
)

TASK_RULES = """TASK:
1) If output.format is "description": produce a concise, hierarchical UI spec (navigation, layouts, components, states, error/empty/loading).
2) If output.format is "component-spec": list atomic components, props, events, variants, accessibility notes, and state diagrams where useful.
3) If output.format starts with "code-": generate complete, minimal, production-ready code for the requested framework with:
   - folder structure
   - at least the top N screens by priority from 'screens'
   - form validation, empty/error/loading states
   - basic a11y (labels, alt text, focus management)
   - comments explaining non-obvious decisions
   - sample data when data.sampleRecordsNeeded=true
   - honor designSystem (e.g., Tailwind classes or Material components)
   - respect constraints and deliverables

RULES:
- Follow style.modes, localization, accessibility, and integrations (e.g., Maps on vehicle detail, Payments on checkout).
- Use the platform.targets and responsive behavior responsibly.
- If something is ambiguous, choose reasonable defaults and state assumptions at the top.
- Avoid external libraries unless permitted; prefer built-ins and the specified design system.
- Keep code cohesive and idiomatic for the chosen stack."""


def build_prompt(answers: Mapping[str, Any]) -> str:
    context = json.dumps(answers, indent=2, ensure_ascii=False)
    return "\n\n".join(
        [
            "SYSTEM:\n" + SYSTEM_PROMPT,
            "USER:\n" + USER_INSTRUCTION,
            "<CONTEXT>\n" + context + "\n</CONTEXT>",
            TASK_RULES,
        ]
    )


__all__ = ["SYSTEM_PROMPT", "TASK_RULES", "build_prompt"]
