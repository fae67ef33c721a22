import os
from dotenv import load_dotenv

load_dotenv()  # charge .env


def _float_or_none(value):
    return float(value) if value not in (None, "", "0") else None


class Settings:
    ENV: str = os.getenv("ENV", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    AI_PROVIDER: str = os.getenv("AI_PROVIDER", "gemini").lower()
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    OPENROUTER_API_KEY: str = os.getenv("OPENROUTER_API_KEY")
    OPENROUTER_MODEL: str = os.getenv("OPENROUTER_MODEL", "google/gemini-2.5-flash-lite")

    # secondes, vide = pas de limite
    GENERATION_TIMEOUT: float = _float_or_none(os.getenv("GENERATION_TIMEOUT", "60"))
    MAX_IMAGE_BYTES: int = int(os.getenv("MAX_IMAGE_BYTES", str(10 * 1024 * 1024)))  # 10 Mo

    @property
    def is_production(self) -> bool:
        return self.ENV.lower() == "production"

settings = Settings()
