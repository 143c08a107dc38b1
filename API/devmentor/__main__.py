import uvicorn

from devmentor.core.settings import settings


def main() -> None:
    uvicorn.run("devmentor.main:app", host=settings.app_host, port=settings.app_port)


if __name__ == "__main__":
    main()
