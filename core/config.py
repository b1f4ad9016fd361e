import os
from dotenv import load_dotenv

load_dotenv()


def _optional_float(name: str) -> float | None:
    value = os.getenv(name)
    if not value:
        return None
    return float(value)


class Settings:
    PROJECT_NAME: str = "Comphub"
    PROJECT_VERSION: str = "1.0.0"

    # server settings
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "5000"))
    API_PREFIX: str = os.getenv("API_PREFIX", "/api/v1")

    # logging filter, e.g. "info,comphub=debug"
    LOG_FILTER: str = os.getenv("LOG_FILTER", "comphub=debug")

    # optional deadline for a whole submission; unset means no deadline
    EXECUTION_TIMEOUT_SECONDS: float | None = _optional_float(
        "EXECUTION_TIMEOUT_SECONDS"
    )


settings = Settings()
