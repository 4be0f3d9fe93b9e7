import os
from dataclasses import dataclass
from dotenv import load_dotenv


@dataclass
class Settings:
	wigle_api_key: str | None = None
	http_timeout: float = 60.0
	log_level: str = "INFO"
	log_file: str | None = None
	web_port: int = 8000


def get_settings() -> Settings:
	# Load .env if present
	load_dotenv(override=False)
	return Settings(
		wigle_api_key=os.getenv("WIGLE_API_KEY") or None,
		http_timeout=float(os.getenv("HTTP_TIMEOUT", "60")),
		log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
		log_file=os.getenv("LOG_FILE") or None,
		web_port=int(os.getenv("WEB_PORT", "8000")),
	)
