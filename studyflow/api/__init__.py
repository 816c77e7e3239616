"""HTTP API for the StudyFlow quiz service."""
