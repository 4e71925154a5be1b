# PUBLIC_INTERFACE
"""
ASGI application entrypoint.

    uvicorn school_dashboard.asgi:app --host 0.0.0.0 --port 3001

Importing this module builds the app from the environment, so a missing
IDENTITY_SECRET_KEY stops the process before it binds a port.
"""
from .main import create_app

app = create_app()
