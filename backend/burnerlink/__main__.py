"""Run the relay with uvicorn: `python -m burnerlink`."""

import uvicorn

from burnerlink.config import get_settings


def main() -> None:
    settings = get_settings()
    # Single process: session state lives in this process's memory.
    uvicorn.run(
        "burnerlink.main:app",
        host=settings.host,
        port=settings.port,
        workers=1,
        log_config=None,
    )


if __name__ == "__main__":
    main()
