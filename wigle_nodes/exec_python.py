import importlib
from typing import Dict, Any, Optional
from .schema import NodeSpec, ImplPython
from .errors import ExecutionError


async def exec_python(spec: NodeSpec, params: Dict[str, Any], inputs: Dict[str, Any], creds: Optional[Dict[str, Any]], ctx):
    """Await ``module.function(params, inputs, creds, ctx)`` of a Python plugin."""
    impl: ImplPython = spec.impl  # type: ignore
    try:
        plugin = importlib.import_module(impl.module)
    except ModuleNotFoundError as e:
        raise ExecutionError(f"Plugin module {impl.module} for node {spec.name} is not installed") from e
    fn = getattr(plugin, impl.function, None)
    if not callable(fn):
        raise ExecutionError(f"Function {impl.function} not found in {impl.module}")
    return await fn(params, inputs, creds, ctx)
