"""Entry point for the Wazaifi API server.

Serves the FastAPI application with uvicorn.  Host, port, storage and
logging are read from environment variables (see
``wazaifi_api/app/core/config.py``), for example::

    DATA_DIR=/var/lib/wazaifi PORT=3000 python run.py
"""
import asyncio

from uvicorn import Config, Server

from wazaifi_api.app.core.config import settings
from wazaifi_api.app.main import create_app


async def main() -> None:
    """Build the application and serve it until interrupted."""
    app = create_app(settings)
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
