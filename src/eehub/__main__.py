"""Environmental Education Hub entrypoint.

Run with:
  python -m eehub
"""

import uvicorn

from eehub.config import load_settings
from eehub.logging_setup import configure_logging


def main() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)
    uvicorn.run(
        "eehub.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
    )

if __name__ == "__main__":
    main()
