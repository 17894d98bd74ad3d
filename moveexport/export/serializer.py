"""Deterministic JSON output for export documents."""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any, Union

from moveexport.errors import SerializationError
from moveexport.export.schema import Document, Summary


def document_to_dict(doc: Union[Document, Summary]) -> dict[str, Any]:
    """Convert a document to plain dicts and lists, preserving list order."""
    return asdict(doc)


def serialize_document(doc: Union[Document, Summary]) -> str:
    """Serialize a document to pretty-printed, deterministic JSON.

    Lists keep declaration order; object keys are sorted, so the same model
    always yields byte-identical text.

    Raises:
        SerializationError: If the document cannot be encoded.
    """
    try:
        return json.dumps(
            document_to_dict(doc), indent=2, sort_keys=True, ensure_ascii=False
        )
    except (TypeError, ValueError, RecursionError) as e:
        raise SerializationError(f"Cannot encode document: {e}") from e

