from typing import Dict, Any

import httpx

from wigle_nodes.schema import CredentialTestResult
from wigle_nodes.errors import ResponseFormatError
from wigle_nodes.exec_http import exec_openapi
from wigle_nodes.plugins.wigle.node import api_operation


async def run(creds: Dict[str, Any], ctx) -> CredentialTestResult:
    try:
        await exec_openapi(api_operation("wigle.profile.user", "Get user profile"), {}, {}, creds, ctx)
    except httpx.HTTPError as e:
        ctx.log.debug("WiGLE connection test failed: %s", e)
        return CredentialTestResult(status="Error", message=str(e))
    except ResponseFormatError as e:
        # the profile body is not inspected, any 2xx answer means the key works
        ctx.log.debug("WiGLE profile body ignored: %s", e)

    ctx.log.debug("WiGLE connection test succeeded")
    return CredentialTestResult(status="OK", message="Connection successful!")
