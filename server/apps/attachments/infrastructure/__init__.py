"""Infrastructure layer for attachments app.

This package contains integrations with external systems:
- Local filesystem storage of attachment folders
- Adapter over django uploaded files
- Image processing (Pillow)

Keep infrastructure concerns separate from the naming rules.
"""
