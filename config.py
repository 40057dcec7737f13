import os
from dotenv import load_dotenv

load_dotenv()


def parse_origins(value: str) -> list:
    """Comma-separated origins, blanks dropped."""
    return [origin.strip() for origin in value.split(",") if origin.strip()]


class Config:
    # Server
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "3000"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    # CORS Configuration
    CORS_ORIGINS = parse_origins(os.getenv("CORS_ORIGINS", "*"))

    # Uploads
    MAX_UPLOAD_MB = int(os.getenv("MAX_UPLOAD_MB", "10"))

    # Image proxy
    IMAGE_PROXY_TIMEOUT = float(os.getenv("IMAGE_PROXY_TIMEOUT", "15"))

    def max_upload_bytes(self) -> int:
        return self.MAX_UPLOAD_MB * 1024 * 1024


config = Config()
