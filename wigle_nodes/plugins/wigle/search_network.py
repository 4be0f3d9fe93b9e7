from typing import Dict, Any, List, Optional

import httpx

from wigle_nodes.errors import ExecutionError, NodeOperationError, ResponseFormatError
from wigle_nodes.exec_http import exec_openapi
from wigle_nodes.runtime import render_template, resolve_params
from wigle_nodes.plugins.wigle.node import WIGLE_NODE, api_operation
from wigle_nodes.plugins.wigle.query import build_query

DEFAULT_RESULTS_FIELD = "wigle"

STATUS_MESSAGES = {
    400: "Request error.",
    402: "Insufficient balance for commercial query.",
    410: "Query Failed.",
    429: "Too many queries today.",
}
UNKNOWN_ERROR = "Unknown error occurred."
NETWORK_ERROR = "Network error occurred."


async def _search(query: Dict[str, Any], creds: Optional[Dict[str, Any]], ctx, index: int) -> Any:
    try:
        out = await exec_openapi(api_operation("wigle.network.search", "Search network"), query, {}, creds, ctx)
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        ctx.log.warning("WiGLE search failed for item %d with status %d", index, status)
        raise NodeOperationError(
            STATUS_MESSAGES.get(status, UNKNOWN_ERROR),
            item_index=index,
            status_code=status,
            description=e.response.text,
        ) from e
    except httpx.RequestError as e:
        ctx.log.warning("WiGLE search failed for item %d: %s", index, e)
        raise NodeOperationError(NETWORK_ERROR, item_index=index, description=str(e)) from e
    except ResponseFormatError as e:
        raise NodeOperationError(UNKNOWN_ERROR, item_index=index, description=str(e)) from e

    data = out["response"]
    if not isinstance(data, dict):
        raise NodeOperationError(UNKNOWN_ERROR, item_index=index, description=f"Unexpected response body: {data!r}")
    return data.get("results")


OPERATIONS = {"search_network": _search}


async def run(params: Dict[str, Any], inputs: Dict[str, Any], creds: Optional[Dict[str, Any]], ctx):
    """Run the WiGLE node over its input items.

    ``inputs`` carries ``{"items": [{"json": {...}}, ...]}``; without an
    ``items`` key the inputs dict itself is treated as a single item. String
    parameters may reference the current item with ``${json.<field>}``.
    Items are processed in order and the first failure aborts the run.
    """
    inputs = inputs or {}
    items: List[Dict[str, Any]] = inputs["items"] if "items" in inputs else [{"json": dict(inputs)}]

    out_items: List[Dict[str, Any]] = []
    for index, item in enumerate(items):
        source = item.get("json") or {}
        try:
            item_params = resolve_params(WIGLE_NODE, render_template(params, {"json": source, "item_index": index}))
        except ExecutionError as e:
            raise NodeOperationError(str(e), item_index=index) from e
        try:
            query = build_query(item_params)
        except (ValueError, TypeError) as e:
            # WiGLE rejects a NaN box the same way
            raise NodeOperationError(STATUS_MESSAGES[400], item_index=index, description=str(e)) from e

        ctx.log.debug("Item %d: %s query=%s", index, item_params["operation"], query)
        results = await OPERATIONS[item_params["operation"]](query, creds, ctx, index)
        if isinstance(results, list):
            ctx.log.debug("Item %d: %d results", index, len(results))

        field = item_params["options"].get("results_field") or DEFAULT_RESULTS_FIELD
        out_items.append({"json": {**source, field: results}, "paired_item": {"item": index}})

    return {"items": out_items}
