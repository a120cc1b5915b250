import uvicorn

from presign_gateway.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "presign_gateway.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        timeout_keep_alive=10,
    )


if __name__ == "__main__":
    main()
