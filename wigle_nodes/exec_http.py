from typing import Dict, Any, Optional
from .schema import NodeSpec, ImplOpenAPI, AuthSpec
from .errors import ResponseFormatError

JSON_HEADERS = {"Accept": "application/json", "Content-Type": "application/json"}


def build_request(openapi_provider: str, operation_id: str, params: Dict[str, Any], base_url_override: Optional[str]):
    """Split node params into the pieces of one HTTP request.

    Parameters are routed by where the operation declares them (path, query
    or header); anything undeclared is dropped unless the operation takes a
    request body. Returns (method, url, query, headers, body).
    """
    from .openapi_registry import get_operation

    op, server_url = get_operation(openapi_provider, operation_id)
    placed: Dict[str, Dict[str, Any]] = {"path": {}, "query": {}, "header": {}}
    for p in op.get("parameters", []):
        where, name = p.get("in"), p["name"]
        if where in placed and name in params:
            placed[where][name] = params[name]

    url = (base_url_override or server_url).rstrip("/") + op["path"].format(**placed["path"])
    body = None
    if op.get("requestBody"):
        declared = {k for group in placed.values() for k in group}
        body = params.get("body") or {k: v for k, v in params.items() if k not in declared}

    return op["method"].upper(), url, placed["query"], placed["header"], body


def auth_headers(auth: AuthSpec, creds: Optional[Dict[str, Any]]) -> Dict[str, str]:
    if auth.type == "basic" and creds and creds.get("api_key"):
        # WiGLE issues the "Encoded for use" token ready for the Basic scheme
        return {"Authorization": f"Basic {creds['api_key']}"}
    return {}


def _decode(r) -> Any:
    if "application/json" not in r.headers.get("content-type", ""):
        raise ResponseFormatError(f"Expected a JSON body from {r.request.url}, got {r.headers.get('content-type') or 'no content type'}")
    try:
        return r.json()
    except ValueError as e:
        raise ResponseFormatError(f"Malformed JSON body from {r.request.url}: {e}") from e


async def exec_openapi(spec: NodeSpec, params: Dict[str, Any], inputs: Dict[str, Any], creds: Optional[Dict[str, Any]], ctx) -> Dict[str, Any]:
    """Send one OpenAPI operation through the context's HTTP client.

    Raises ``httpx.HTTPStatusError`` for error statuses,
    ``httpx.RequestError`` when no response was received and
    ``ResponseFormatError`` when a 2xx body is not JSON; callers decide how
    to present those.
    """
    impl: ImplOpenAPI = spec.impl  # type: ignore
    method, url, query, header_params, body = build_request(
        impl.openapi_provider, impl.operation_id, params, impl.base_url
    )

    headers = {**JSON_HEADERS, **header_params, **auth_headers(spec.auth, creds)}

    ctx.log.debug("%s %s params=%s", method, url, query)
    r = await ctx.http.request(method, url, params=query, headers=headers, json=body)
    r.raise_for_status()
    return {"response": _decode(r)}
