"""ASGI entry point: ``uvicorn src.greenmarket.main:app``."""

from src.greenmarket.api.http.app import create_app
from src.greenmarket.runtime.context import get_config

app = create_app()


if __name__ == "__main__":
    import uvicorn

    config = get_config()
    uvicorn.run(
        app,
        host=config.app.host,
        port=config.app.port,
        access_log=False,  # We handle access logging in middleware
    )
