"""
Identity resolution for API requests.

The upstream session layer (a reverse proxy or the frontend's auth) is
expected to set ``X-User-Id`` and optionally ``X-User-Name``. A request
without ``X-User-Id`` resolves to no identity; the engine then rejects
any turn action with an authorization error.
"""

from typing import Optional

from fastapi import Header

from grandline.services.identity import Identity


async def get_identity(
    x_user_id: Optional[str] = Header(default=None),
    x_user_name: Optional[str] = Header(default=None),
) -> Optional[Identity]:
    if x_user_id is None or not x_user_id.strip():
        return None
    return Identity(user_id=x_user_id.strip(), display_name=x_user_name)
