import uvicorn

from xlf_translator.api.routes import create_app
from xlf_translator.core.config import Settings


def main():
    settings = Settings.from_env()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
