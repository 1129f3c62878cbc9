from typing import Any, Dict, Optional

import httpx

import config


async def get_json(
    url: str,
    params: Optional[Dict[str, Any]] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> Any:
    """GET a JSON document; raises httpx.HTTPError or ValueError on failure"""
    if client is None:
        async with httpx.AsyncClient(timeout=config.HTTP_TIMEOUT_SECONDS) as own_client:
            return await get_json(url, params, own_client)

    response = await client.get(url, params=params, timeout=config.HTTP_TIMEOUT_SECONDS)
    response.raise_for_status()
    return response.json()
