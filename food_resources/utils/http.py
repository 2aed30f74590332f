# food_resources/utils/http.py
import httpx
from typing import Optional

async def get_json(
    url: str,
    params: Optional[dict] = None,
    headers: Optional[dict] = None,
    timeout: float = 30.0,
    client: Optional[httpx.AsyncClient] = None,
):
    # reuse the caller's client when given so tests can plug in a MockTransport
    if client is not None:
        r = await client.get(url, params=params, headers=headers, timeout=timeout)
        r.raise_for_status()
        return r.json()
    async with httpx.AsyncClient(timeout=timeout) as own_client:
        r = await own_client.get(url, params=params, headers=headers)
        r.raise_for_status()
        return r.json()
