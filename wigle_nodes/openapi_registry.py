import json
import os
from functools import lru_cache
from typing import Tuple

import yaml

from .errors import ExecutionError

BUNDLED_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "openapi_specs")


@lru_cache(maxsize=128)
def _load_openapi(provider: str, base: str) -> dict:
    for ext, load in ((".json", json.load), (".yaml", yaml.safe_load)):
        path = os.path.join(base, provider + ext)
        if os.path.exists(path):
            with open(path, "r", encoding="utf-8") as f:
                return load(f)
    raise ExecutionError(
        f"No OpenAPI document for provider '{provider}' in {base} "
        f"(expected {provider}.json or {provider}.yaml; unset OPENAPI_CACHE_DIR to use the bundled ones)"
    )


def get_operation(provider: str, operation_id: str) -> Tuple[dict, str]:
    """Find ``operation_id`` in the provider's OpenAPI document.

    Documents come from ``OPENAPI_CACHE_DIR`` when set, otherwise from the
    copies bundled with the package. Returns the operation and the first
    server URL.
    """
    oas = _load_openapi(provider, os.getenv("OPENAPI_CACHE_DIR") or BUNDLED_DIR)
    server_url = (oas.get("servers") or [{"url": ""}])[0]["url"]
    for path, methods in (oas.get("paths") or {}).items():
        for method, op in methods.items():
            if op.get("operationId") == operation_id:
                return {
                    "method": method,
                    "path": path,
                    "parameters": op.get("parameters", []),
                    "requestBody": op.get("requestBody"),
                }, server_url
    raise ExecutionError(f"Operation '{operation_id}' is not declared by the {provider} OpenAPI document")
