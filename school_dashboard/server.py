"""
Module runner for the School Dashboard backend:

    python -m school_dashboard.server

Loads environment variables from .env and starts uvicorn with the
configured host/port.
"""
import os

import uvicorn
from dotenv import load_dotenv


def _bool_env(name: str, default: bool = False) -> bool:
    val = os.getenv(name)
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "on"}


# PUBLIC_INTERFACE
def main():
    """Entry point to start the FastAPI server with environment-based configuration."""
    # Before the settings singleton is first read.
    load_dotenv()

    from .core.settings import get_settings
    from .main import create_app

    settings = get_settings()
    reload = _bool_env("RELOAD", False)

    print(f"[server] Starting School Dashboard backend on {settings.host}:{settings.port} (log_level={settings.log_level})")
    if reload:
        uvicorn.run("school_dashboard.asgi:app", host=settings.host, port=settings.port, reload=True, log_level=settings.log_level)
    else:
        uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level=settings.log_level)


if __name__ == "__main__":
    main()
