# =======================================================================================
# app/__main__.py - Run the API with uvicorn
# =======================================================================================
import uvicorn
from .config import config


def main():
    uvicorn.run(
        "app.main:app",
        host=config.API_HOST,
        port=config.API_PORT,
        log_level="debug" if config.API_DEBUG else config.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
