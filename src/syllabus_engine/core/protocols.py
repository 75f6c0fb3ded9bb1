"""
Core protocols defining contracts for the engine's collaborators.

The engine never talks to a database or a language model directly. It
depends on two contracts:

- DraftingClient: the external text-generation service. Requests are a
  role-tagged system prompt plus a user prompt; the reply is raw text that
  must parse as one JSON object.
- DocumentStore: key-based persistence of documents, with append-only
  updates of recommendations and an atomic compare-and-set on the editing
  flag.

PATTERN:
--------
- Protocol defines the contract
- Production implementation lives beside its concern (drafting.client)
- In-memory implementation for tests and local runs (stores.memory)
- Services receive implementations through their constructor
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Collection, Protocol, runtime_checkable

if TYPE_CHECKING:
    from syllabus_engine.documents.models import Document, Recommendation


# ---------------------------------------------------------------------------
# DRAFTING CLIENT PROTOCOL
# ---------------------------------------------------------------------------


@runtime_checkable
class DraftingClient(Protocol):
    """
    Contract for the external drafting/analysis service.

    Implementations:
    - OpenAIDraftingClient (production)
    - MagicMock / scripted fakes (testing)
    """

    def complete(self, system_prompt: str, user_prompt: str) -> str:
        """Send one role-tagged request and return the raw reply text."""
        ...


# ---------------------------------------------------------------------------
# DOCUMENT STORE PROTOCOL
# ---------------------------------------------------------------------------


@runtime_checkable
class DocumentStore(Protocol):
    """
    Contract for document persistence.

    Implementations:
    - InMemoryDocumentStore (testing/development)

    Reads return detached copies; callers never hold a live reference to
    stored state.
    """

    def add(self, document: Document) -> Document:
        """Store a new document. Fails if the id already exists."""
        ...

    def get(self, document_id: str) -> Document:
        """Load a document by id."""
        ...

    def list_documents(self) -> list[Document]:
        """Snapshot of every stored document (the similarity corpus)."""
        ...

    def update(self, document_id: str, **changes: Any) -> Document:
        """Apply field changes to one document and return the new value."""
        ...

    def append_recommendations(
        self,
        document_id: str,
        recommendations: list[Recommendation],
    ) -> Document:
        """Append recommendations to a document's list."""
        ...

    def update_recommendation(
        self,
        document_id: str,
        recommendation: Recommendation,
    ) -> Document:
        """Replace the stored recommendation that has the same id."""
        ...

    def compare_and_set_editing_status(
        self,
        document_id: str,
        expected: Collection[str],
        new_status: str,
    ) -> bool:
        """
        Atomically set editing_status to new_status if it is currently one
        of the expected values. Returns False (and changes nothing) otherwise.
        """
        ...
