from __future__ import annotations

import re
import uuid
from contextvars import ContextVar
from typing import Optional

_request_id: ContextVar[str] = ContextVar("_request_id", default="-")

_SAFE_RID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

def new_request_id(incoming: Optional[str] = None) -> str:
    """Bind a request id to the current context, reusing a well-formed caller-supplied one."""
    rid = incoming if incoming and _SAFE_RID.match(incoming) else uuid.uuid4().hex[:12]
    _request_id.set(rid)
    return rid

def get_request_id() -> str:
    return _request_id.get()
