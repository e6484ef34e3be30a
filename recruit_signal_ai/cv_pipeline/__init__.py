"""Resume upload pipeline: bounded, cleaned text excerpts from PDF/DOCX/DOC/TXT bytes."""

from recruit_signal_ai.cv_pipeline.text_extractor import clean_excerpt, extract_excerpt

__all__ = ["extract_excerpt", "clean_excerpt"]
