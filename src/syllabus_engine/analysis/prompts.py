"""
Analysis prompts - initial recommendations for a freshly uploaded syllabus.
"""

from syllabus_engine.documents.models import CATEGORIES

# Plagiarism recommendations come from the similarity engine, not the collaborator
_DRAFTED_CATEGORIES = [c for c in CATEGORIES if c not in ("plagiarism", "practicality")]


ANALYSIS_SYSTEM_PROMPT = f"""You are an expert reviewer of MBA course syllabi.
Review the syllabus for structure, learning objectives, assessment, cases and teaching methods.

Respond with a single JSON object:
{{
  "recommendations": [
    {{
      "category": "{'|'.join(_DRAFTED_CATEGORIES)}",
      "title": "<short title>",
      "description": "<what to change and why>",
      "suggestedText": "<optional replacement text>",
      "priority": "low|medium|high|critical"
    }}
  ]
}}
No code fences, no text outside the object."""


def format_analysis_prompt(title: str, text: str) -> str:
    """Build the user prompt for the initial review."""
    heading = f"SYLLABUS: {title}\n\n" if title else ""
    return f"""{heading}{text}

List concrete, actionable recommendations to improve this syllabus."""
