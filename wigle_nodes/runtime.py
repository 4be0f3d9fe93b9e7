import importlib
import logging
import re
from typing import Any, Awaitable, Callable, Dict, Optional

import httpx

from .schema import NodeSpec, ImplOpenAPI, ImplPython, IOField, CredentialTestResult
from .errors import ExecutionError, NodeOperationError, ResponseFormatError  # noqa: F401
from .exec_http import exec_openapi
from .exec_python import exec_python

_PLACEHOLDER_RE = re.compile(r"\$\{([^}]+)\}")

CredResolver = Callable[[Optional[str], Optional[str]], Awaitable[Dict[str, Any]]]


class Context:
    def __init__(self, http: httpx.AsyncClient, logger: logging.Logger, cred_resolver: CredResolver):
        self.http = http
        self.log = logger
        self.cred_resolver = cred_resolver


def _resolve_path(path: str, context: dict) -> Any:
    current: Any = context
    for part in path.split('.'):
        if isinstance(current, dict):
            current = current.get(part)
        elif isinstance(current, (list, tuple)) and part.isdigit():
            # an index past the end reads as missing, like an absent key
            current = current[int(part)] if int(part) < len(current) else None
        else:
            raise ExecutionError(f"Unable to resolve placeholder '{path}'")
    return current


def render_template(value: Any, context: dict) -> Any:
    if isinstance(value, str):
        matches = list(_PLACEHOLDER_RE.finditer(value))
        if not matches:
            return value
        if len(matches) == 1 and matches[0].span() == (0, len(value)):
            return _resolve_path(matches[0].group(1), context)
        return _PLACEHOLDER_RE.sub(lambda m: str(_resolve_path(m.group(1), context)), value)
    if isinstance(value, dict):
        return {k: render_template(v, context) for k, v in value.items()}
    if isinstance(value, list):
        return [render_template(v, context) for v in value]
    return value


def _is_shown(field: IOField, values: Dict[str, Any]) -> bool:
    return all(values.get(dep) in allowed for dep, allowed in field.show_when.items())


def _resolve_fields(fields: Dict[str, IOField], raw: Dict[str, Any], path: str = "") -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    # ungated fields first so show_when conditions see their defaults
    ordered = sorted(fields.items(), key=lambda kv: bool(kv[1].show_when))
    for name, field in ordered:
        if not _is_shown(field, out):
            continue
        value = raw.get(name)
        if value is None:
            if field.required and field.default is None:
                raise ExecutionError(f"Missing required parameter '{path}{name}'")
            value = field.default
        if field.type == "collection":
            value = _resolve_fields(field.properties, value or {}, f"{path}{name}.")
        elif field.options and value not in field.options:
            raise ExecutionError(f"Invalid value {value!r} for parameter '{path}{name}'")
        out[name] = value
    return out


def resolve_params(spec: NodeSpec, raw: Dict[str, Any]) -> Dict[str, Any]:
    """Apply declared defaults and visibility rules to raw node parameters.

    Fields hidden by an unmet ``show_when`` condition are dropped even when
    a value was supplied, so executors never read them. Unknown keys are
    ignored.
    """
    return _resolve_fields(spec.inputs, raw or {})


async def run_node(spec: NodeSpec, params: Dict[str, Any], inputs: Dict[str, Any], ctx: Context) -> Dict[str, Any]:
    creds = None
    if spec.auth and spec.auth.type != "none":
        credential_id = params.get("credential_id") if isinstance(params, dict) else None
        creds = await ctx.cred_resolver(spec.auth.provider, credential_id)
        if spec.auth.required and not (creds or {}).get("api_key"):
            raise ExecutionError(f"Node {spec.name} requires '{spec.auth.credential or spec.auth.provider}' credentials")

    ctx.log.info("Running node %s@%s", spec.name, spec.version)
    if isinstance(spec.impl, ImplOpenAPI):
        return await exec_openapi(spec, params, inputs, creds, ctx)
    elif isinstance(spec.impl, ImplPython):
        return await exec_python(spec, params, inputs, creds, ctx)

    raise ExecutionError(f"Unknown impl for {spec.name}")


async def test_credentials(spec: NodeSpec, creds: Dict[str, Any], ctx: Context) -> CredentialTestResult:
    if not spec.auth.tested_by:
        raise ExecutionError(f"Node {spec.name} declares no credential test")
    module, _, function = spec.auth.tested_by.partition(":")
    fn = getattr(importlib.import_module(module), function or "run", None)
    if not fn:
        raise ExecutionError(f"Function {function} not found in {module}")
    ctx.log.info("Testing credentials for node %s", spec.name)
    return await fn(creds, ctx)


# keep pytest from collecting the coroutine above when imported into test modules
test_credentials.__test__ = False  # type: ignore[attr-defined]
