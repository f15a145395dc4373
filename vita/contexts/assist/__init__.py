"""
Assist Context

Responsibilities:
- Builds rewrite prompts per block type
- Calls the configured LLM provider once per request
- Converts provider failures into ServiceError

Owns: AI text-transformation requests and responses
Never: Mutates document content (section editors apply the result)
"""

from vita.contexts.assist.service import (
    ImprovementRequest,
    ImprovementResponse,
    LLMImprovementService,
    TextImprovementService,
)

__all__ = [
    "ImprovementRequest",
    "ImprovementResponse",
    "LLMImprovementService",
    "TextImprovementService",
]
