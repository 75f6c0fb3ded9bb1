"""
Drafting module - the text-generation collaborator and its reply contract.

USAGE:
------
from syllabus_engine.drafting import OpenAIDraftingClient, parse_reply, RevisionReply

client = OpenAIDraftingClient()
reply = parse_reply(client.complete(system, user), RevisionReply)
"""

from syllabus_engine.drafting.client import OpenAIDraftingClient
from syllabus_engine.drafting.parsing import parse_reply, strip_code_fence
from syllabus_engine.drafting.schemas import (
    ChangeDescriptor,
    RevisionReply,
    RecommendationDraft,
    RecommendationsReply,
    QuestionReply,
    AnswerReply,
)

__all__ = [
    # Client
    "OpenAIDraftingClient",
    # Parsing
    "parse_reply",
    "strip_code_fence",
    # Schemas
    "ChangeDescriptor",
    "RevisionReply",
    "RecommendationDraft",
    "RecommendationsReply",
    "QuestionReply",
    "AnswerReply",
]
