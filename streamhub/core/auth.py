from typing import Optional
from fastapi import Header, HTTPException, status


def get_current_user_id(x_user_id: Optional[str] = Header(None)) -> Optional[int]:
    """Opaque caller identity resolved by the gateway in front of this service.

    Anonymous requests are allowed; discovery only uses the id to record
    history and to annotate details with per-user state.
    """
    if x_user_id is None or x_user_id.strip() == "":
        return None
    try:
        return int(x_user_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid X-User-Id header",
        )
