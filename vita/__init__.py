"""
VITA - resume builder core

Block-based resume documents with structural editing, AI-assisted section
editing, a deterministic template renderer and an image-based PDF exporter.

Architecture:
- Editing Context: Block model, block store, section editors, editing session
- Assist Context: AI text-transformation service client
- Templating Context: Projection of blocks into a rendered visual document
- Rendering Context: Rasterization and page-fit PDF export
- Persistence Context: Document storage adapter and profile export
"""

__version__ = "0.1.0"
