"""Application workflows that orchestrate parsing, OCR and storage."""
