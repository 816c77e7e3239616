"""
Entry point for the StudyFlow quiz service.

Run with:
    uvicorn studyflow.api.main:app --reload --port 8100
    python main.py
"""
import uvicorn

from studyflow.config import get_settings

settings = get_settings()

if __name__ == "__main__":
    uvicorn.run(
        "studyflow.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
        log_level=settings.log_level.lower(),
    )
