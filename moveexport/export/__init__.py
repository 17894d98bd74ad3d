"""Model-to-JSON export: entity records, expression trees, documents."""

from moveexport.export.assembler import (
    assemble,
    build_document,
    build_full_document,
    build_summary,
)
from moveexport.export.expressions import exp_to_node
from moveexport.export.schema import Document, ExportFormat, ExpNode, Summary
from moveexport.export.serializer import serialize_document

__all__ = [
    "Document",
    "ExpNode",
    "ExportFormat",
    "Summary",
    "assemble",
    "build_document",
    "build_full_document",
    "build_summary",
    "exp_to_node",
    "serialize_document",
]
