from pathlib import Path
from typing import Any, Optional, Union


def make_json_safe(obj: Any) -> Any:
    """
    Convert arbitrary Python objects into JSON-serializable structures.

    Handles primitives, raw bytes, paths, dictionaries, and iterables.
    Falls back to ``str(obj)``.

    Bytes become a list of integers so the UI can wrap them in a
    ``Uint8Array``.

    :param obj: Any Python object.
    :return: A JSON-serializable representation.
    """
    if obj is None:
        return None
    if isinstance(obj, (str, int, float, bool)):
        return obj
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return list(bytes(obj))
    if isinstance(obj, Path):
        return str(obj)
    if isinstance(obj, dict):
        return {str(k): make_json_safe(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple, set)):
        return [make_json_safe(v) for v in obj]
    return str(obj)


def load_html(path: Optional[Union[Path, str]]) -> str:
    """Load the UI entry page relative to the working directory, or a fallback page."""
    if path is None:
        return _fallback_html()

    html_src = Path.cwd() / path
    if not html_src.is_file():
        return _fallback_html()

    return html_src.read_text(encoding="utf-8")


def _fallback_html() -> str:
    return r"""
<div style="
    position: absolute;
    top: 50%;
    left: 50%;
    transform: translate(-50%, -50%);
    background: #fff;
    border-radius: 12px;
    box-shadow: 0 4px 12px rgba(0,0,0,0.15);
    padding: 24px 32px;
    text-align: center;
    font-family: sans-serif;
    max-width: 400px;
">
    <h2 style="margin: 0; color: #333; font-size: 1.2rem;">
        Viewer UI not found - check the configured HTML entry.
    </h2>
</div>
"""
