"""Gemini client wrapper.

One JSON-constrained `generate_content` request through the `google-genai`
SDK (async client), driven from synchronous Streamlit code.

Public surface area:

    generate_json(api_key, system_instruction, content, response_schema, model, timeout_s) -> str

The returned string is the model's JSON text (``candidates[0].content.parts[0].text``).
Transport and HTTP errors from the SDK propagate to the caller unchanged.
"""

from __future__ import annotations

import asyncio
import threading
from typing import Any, Dict


def _run_sync(coro):
    """Run an async coroutine from sync code.

    Streamlit apps are typically synchronous (no running event loop).
    If a loop *is* already running (e.g., notebook), we execute the coroutine
    in a dedicated thread to avoid nested-loop issues.
    """

    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)

    # Fallback: run in a new thread with its own event loop.
    result: list[str] = []
    err: list[BaseException] = []

    def _thread_main():
        try:
            result.append(asyncio.run(coro))
        except BaseException as e:  # noqa: BLE001
            err.append(e)

    t = threading.Thread(target=_thread_main, daemon=True)
    t.start()
    t.join()

    if err:
        raise err[0]
    return result[0] if result else ""


async def _generate_json_async(
    api_key: str,
    system_instruction: str,
    content: str,
    response_schema: Dict[str, Any],
    model: str,
    timeout_s: int,
) -> str:
    """Async implementation using the google-genai client."""

    try:
        from google import genai
        from google.genai import types
    except Exception as e:  # noqa: BLE001
        raise RuntimeError(
            "Missing dependency: google-genai. Install it in your environment."
        ) from e

    client = genai.Client(
        api_key=api_key,
        http_options=types.HttpOptions(timeout=int(timeout_s * 1000)),
    )
    config = types.GenerateContentConfig(
        system_instruction=system_instruction,
        response_mime_type="application/json",
        response_schema=response_schema,
    )

    # Close the async transport while its loop is still running.
    async with client.aio as aio:
        response = await aio.models.generate_content(
            model=model,
            contents=content,
            config=config,
        )
    return (response.text or "").strip()


def generate_json(
    api_key: str,
    system_instruction: str,
    content: str,
    response_schema: Dict[str, Any],
    model: str = "gemini-2.5-flash",
    timeout_s: int = 120,
) -> str:
    """Returns the JSON text produced by Gemini for a single request."""
    return _run_sync(
        _generate_json_async(
            api_key=api_key,
            system_instruction=system_instruction,
            content=content,
            response_schema=response_schema,
            model=model,
            timeout_s=timeout_s,
        )
    )
