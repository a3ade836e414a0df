"""
Loads the optional JSON document describing HTTP headers sent with every request.
"""

import json
import logging
from pathlib import Path

from m3u8_cli.exceptions import ConfigurationError
from m3u8_cli.utils.formatting import mask_value

log = logging.getLogger(__name__)

SENSITIVE_HEADERS = frozenset({"authorization", "cookie", "proxy-authorization"})


def load_headers(header_file: Path | None) -> list[tuple[str, str]]:
    """
    Reads a flat JSON object of header names to header values.

    Entries whose value is not a string are skipped. The order of the document
    is kept, and nothing is read when no path is given.

    Raises:
        ConfigurationError: If the file is unreadable, is not valid JSON, or its
        top-level value is not an object.
    """
    if header_file is None:
        return []

    try:
        with open(header_file, "r", encoding="utf-8") as f:
            document = json.load(f)
    except OSError as e:
        raise ConfigurationError(
            f"Header file '{header_file}' could not be read: {e}"
        ) from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Header file '{header_file}' is not valid JSON: {e}"
        ) from e

    if not isinstance(document, dict):
        raise ConfigurationError(
            f"Header file '{header_file}' must contain a JSON object, "
            f"got {type(document).__name__}."
        )

    headers = []
    for name, value in document.items():
        if not isinstance(value, str):
            log.debug(f"Ignoring header '{name}': value is not a string.")
            continue
        headers.append((name, value))

    _log_headers(headers)
    return headers


def _log_headers(headers: list[tuple[str, str]]) -> None:
    if not headers:
        log.info("Header file contains no usable headers.")
        return
    shown = ", ".join(
        f"{name}: {mask_value(value) if name.lower() in SENSITIVE_HEADERS else value}"
        for name, value in headers
    )
    log.info(f"Request headers: [dim]{shown}[/dim]")
    log.debug(f"Request headers (unmasked): {headers}")
