import uvicorn

from annacalc.config.settings import settings


def main() -> None:
    uvicorn.run("annacalc.app:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
