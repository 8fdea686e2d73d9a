import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    FRONTEND_URL: str = os.getenv("FRONTEND_URL", "http://localhost:5173")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    REPORT_LOCALE: str = os.getenv("REPORT_LOCALE", "de")
    REPORT_TIMEZONE: str = os.getenv("REPORT_TIMEZONE", "UTC")
    ALLOWED_EXTENSIONS: tuple[str, ...] = tuple(
        ext.strip().lower()
        for ext in os.getenv("ALLOWED_EXTENSIONS", ".log,.txt").split(",")
        if ext.strip()
    )


settings = Settings()
