"""
Resume Maker - structured resume editing, live preview, PDF export and publishing

A single document model drives both an editable form and a visual preview.
The preview serializes to a paginated raster PDF, and the document can be
published to a remote store under a public slug.

Architecture:
- Editing Context: Document model, path-addressed mutations, form session
- Persistence Context: Local key-value mirror and remote save/publish store
- Templating Context: Theme layouts and the mounted HTML surface
- Rendering Context: Rasterization and paginated PDF export
"""

__version__ = "0.1.0"
