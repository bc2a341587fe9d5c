import base64
from typing import Optional, Tuple


def split_data_url(value: str) -> Tuple[Optional[str], str]:
    """Split ``data:<mime>;base64,<payload>`` into ``(mime, payload)``.

    A bare base64 payload comes back unchanged with ``None`` as its MIME type.
    """
    if not value.startswith("data:"):
        return None, value

    header, sep, payload = value.partition(",")
    if not sep:
        return None, value

    mime_type = header[len("data:"):].split(";", 1)[0].strip()
    return (mime_type or None), payload


def to_data_url(raw_bytes: bytes, mime_type: str) -> str:
    encoded = base64.b64encode(raw_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"
