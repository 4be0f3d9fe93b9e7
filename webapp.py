from __future__ import annotations

import os
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from hub.api_nodes import router as nodes_router
from wigle_hub.config import get_settings
from wigle_hub.logs import setup_logger


# Load local environment variables for development parity
load_dotenv(override=False)

settings = get_settings()
log = setup_logger("wigle_nodes", settings.log_file, settings.log_level)

app = FastAPI(title="WiGLE nodes")

# CORS for external workflow editors
_cors_env = os.getenv("CORS_ORIGINS", "*").strip()
if _cors_env == "*":
	origins = ["*"]
else:
	origins = [o.strip() for o in _cors_env.split(",") if o.strip()]
app.add_middleware(
	CORSMiddleware,
	allow_origins=origins,
	allow_credentials=True,
	allow_methods=["*"],
	allow_headers=["*"],
)

app.include_router(nodes_router)


@app.get("/health")
async def health():
	# Lightweight liveness endpoint
	return {"status": "ok"}


if __name__ == "__main__":
	import uvicorn

	log.info("Serving on http://127.0.0.1:%d", settings.web_port)
	uvicorn.run(app, host="127.0.0.1", port=settings.web_port)
