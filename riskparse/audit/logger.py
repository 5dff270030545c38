import json
import os
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from riskparse import config


def append_audit_event(event: Dict[str, Any], path: Optional[str] = None) -> str:
    """
    Append one JSON object per line to the audit log and return the file path.
    Callers pass counts and metadata only, never the analysed contract text.
    path defaults to config.AUDIT_LOG_PATH, looked up on every call.
    """
    target = path or config.AUDIT_LOG_PATH
    directory = os.path.dirname(target)
    if directory:
        os.makedirs(directory, exist_ok=True)

    line = json.dumps({"ts_utc": datetime.now(timezone.utc).isoformat(), **event}, ensure_ascii=False)
    with open(target, "a", encoding="utf-8") as f:
        f.write(line + "\n")
    return target
