"""
Persistence Context

Responsibilities:
- Defines the document storage boundary (DocumentRepository)
- Stores documents as one YAML file each (YamlDocumentRepository)
- Exports the user profile as dated JSON

Owns: Stored document files, profile exports
Never: Interprets block content beyond passing records through
"""

from vita.contexts.persistence.adapter import (
    DocumentRepository,
    DocumentSummary,
    StoredDocument,
    YamlDocumentRepository,
)
from vita.contexts.persistence.profile_export import export_profile_json, profile_filename

__all__ = [
    "DocumentRepository",
    "DocumentSummary",
    "StoredDocument",
    "YamlDocumentRepository",
    "export_profile_json",
    "profile_filename",
]
