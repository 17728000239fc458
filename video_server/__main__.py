import uvicorn

from video_server.config import get_config


def main() -> None:
    config = get_config()
    uvicorn.run(
        "video_server.main:factory",
        factory=True,
        host=config.host,
        port=config.port,
        reload=config.debug,
        access_log=True,
    )


if __name__ == "__main__":
    main()
