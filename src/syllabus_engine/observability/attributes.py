"""
Semantic Conventions for Span Attributes

Defines attribute keys following OpenTelemetry GenAI conventions
plus a custom syllabus.* namespace for engine operations.

Reference: https://opentelemetry.io/docs/specs/semconv/gen-ai/
"""

# ---------------------------------------------------------------------------
# GENAI NAMESPACE (OTel standard)
# ---------------------------------------------------------------------------

GEN_AI_SYSTEM = "gen_ai.system"  # "openai"
GEN_AI_REQUEST_MODEL = "gen_ai.request.model"  # "gpt-4o-mini"

GEN_AI_USAGE_INPUT_TOKENS = "gen_ai.usage.input_tokens"
GEN_AI_USAGE_OUTPUT_TOKENS = "gen_ai.usage.output_tokens"

# Request/Response (optional, controlled by TRACING_CAPTURE_CONTENT)
GEN_AI_PROMPT = "gen_ai.prompt"
GEN_AI_COMPLETION = "gen_ai.completion"


# ---------------------------------------------------------------------------
# SYLLABUS NAMESPACE (custom)
# ---------------------------------------------------------------------------

SYLLABUS_DOCUMENT_ID = "syllabus.document.id"
SYLLABUS_TASK = "syllabus.task"  # "revision", "analysis", "challenge.reply", ...

# Similarity
SYLLABUS_CORPUS_SIZE = "syllabus.similarity.corpus_size"
SYLLABUS_MATCH_COUNT = "syllabus.similarity.match_count"
SYLLABUS_RISK_LEVEL = "syllabus.similarity.risk_level"
SYLLABUS_MAX_SIMILARITY = "syllabus.similarity.max_score"

# Revision
SYLLABUS_ACCEPTED_COUNT = "syllabus.revision.accepted_count"
SYLLABUS_CHARS_ADDED = "syllabus.revision.chars_added"
SYLLABUS_CHARS_REMOVED = "syllabus.revision.chars_removed"

# Challenge
SYLLABUS_CHALLENGE_ROUND = "syllabus.challenge.round"


# ---------------------------------------------------------------------------
# HELPER FUNCTIONS
# ---------------------------------------------------------------------------


def drafting_call_attributes(task: str, model: str) -> dict:
    """Create attributes dict for a drafting request span."""
    return {
        GEN_AI_SYSTEM: "openai",
        GEN_AI_REQUEST_MODEL: model,
        SYLLABUS_TASK: task,
    }


def similarity_attributes(
    document_id: str,
    corpus_size: int,
    match_count: int | None = None,
    risk_level: str | None = None,
    max_score: int | None = None,
) -> dict:
    """Create attributes dict for a similarity pass span."""
    attrs: dict = {
        SYLLABUS_DOCUMENT_ID: document_id,
        SYLLABUS_CORPUS_SIZE: corpus_size,
    }
    if match_count is not None:
        attrs[SYLLABUS_MATCH_COUNT] = match_count
    if risk_level is not None:
        attrs[SYLLABUS_RISK_LEVEL] = risk_level
    if max_score is not None:
        attrs[SYLLABUS_MAX_SIMILARITY] = max_score
    return attrs


def revision_attributes(
    accepted_count: int,
    chars_added: int | None = None,
    chars_removed: int | None = None,
) -> dict:
    """Create attributes dict for a revision span."""
    attrs: dict = {SYLLABUS_ACCEPTED_COUNT: accepted_count}
    if chars_added is not None:
        attrs[SYLLABUS_CHARS_ADDED] = chars_added
    if chars_removed is not None:
        attrs[SYLLABUS_CHARS_REMOVED] = chars_removed
    return attrs
