"""Command-line interface for the StudyFlow quiz service."""
