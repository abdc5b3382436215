"""
Allow running as: python -m clearspeak

Delegates to the single entrypoint main.py.
"""
import uvicorn

from .core.config import get_settings
from .main import create_app


def main() -> None:
    settings = get_settings()
    app = create_app(settings)
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        reload=False,
        workers=1,
    )


if __name__ == "__main__":
    main()
