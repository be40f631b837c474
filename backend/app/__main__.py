"""Run the Mahasiswa API with uvicorn: `python -m app` (from backend/).

Single process; host, port and reload come from Settings (HOST, PORT, RELOAD).
"""

import uvicorn

from app.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_config=None,
    )


if __name__ == "__main__":
    main()
