"""
Hotkeys Server Entry Point
==========================
    python -m hotkeys
"""
import uvicorn

from hotkeys.config import settings


def serve():
    """Start the uvicorn server."""
    uvicorn.run(
        "hotkeys.main:app",
        host=settings.host,
        port=settings.port,
        reload=False
    )


if __name__ == "__main__":
    serve()
