import json
import re
from typing import Any, Dict

# Conservative sanitization: strip tags and control chars.
TAG_RE = re.compile(r"<[^>]+>")
CTRL_RE = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F]")

WHITESPACE_RE = re.compile(r"\s+")


def sanitize_text(text: str, max_len: int) -> str:
    if text is None:
        return ""
    t = str(text)
    t = TAG_RE.sub("", t)
    t = CTRL_RE.sub("", t)
    t = WHITESPACE_RE.sub(" ", t).strip()
    if len(t) > max_len:
        t = t[:max_len].rstrip() + "…"
    return t


def safe_json_loads(s: str) -> Dict[str, Any]:
    obj = json.loads(s)
    if not isinstance(obj, dict):
        raise ValueError("Model output is not a JSON object.")
    return obj
