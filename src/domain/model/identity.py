"""Identity and timestamp helpers shared by domain factories."""

import time
import uuid


def new_id() -> str:
    return str(uuid.uuid4())


def now_ms() -> int:
    """Current time as epoch milliseconds."""
    return int(time.time() * 1000)
