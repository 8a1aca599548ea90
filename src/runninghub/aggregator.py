"""Assembles a task's text result from its output artifacts.

Selection: items without a URL are skipped; items whose fileType is set to
anything other than "txt" are skipped. An empty fileType counts as text.

All selected downloads must succeed. The first failing download aborts the
whole aggregation; a partial result is never returned.
"""

import logging
from typing import Iterable

from src.runninghub.errors import ArtifactDownloadError, NoTextOutputError, TransportError
from src.runninghub.schemas import OutputItem
from src.runninghub.transport import RunningHubTransport

logger = logging.getLogger(__name__)

TEXT_FILE_TYPE = "txt"
ITEM_SEPARATOR = "\n\n"


def select_text_items(items: Iterable[OutputItem]) -> list[OutputItem]:
    """Return the items worth downloading, in their original order."""
    selected = []
    for item in items:
        if not item.file_url:
            continue
        if item.file_type and item.file_type != TEXT_FILE_TYPE:
            continue
        selected.append(item)
    return selected


def fetch_output_text(transport: RunningHubTransport, items: list[OutputItem]) -> str:
    """Download the selected text artifacts and join their stripped contents.

    Raises:
        ArtifactDownloadError: If any selected download fails
        NoTextOutputError: If nothing was selected or everything was blank
    """
    selected = select_text_items(items)
    if not selected:
        raise NoTextOutputError(
            f"No text artifacts among {len(items)} output item(s)"
        )

    parts = []
    for item in selected:
        try:
            body, status_code = transport.download_artifact(item.file_url)
        except TransportError as e:
            raise ArtifactDownloadError(
                f"Download of {item.file_url} failed: {e}", url=item.file_url
            ) from e
        if status_code != 200:
            raise ArtifactDownloadError(
                f"Download of {item.file_url} returned {status_code}",
                url=item.file_url,
                payload=body.decode("utf-8", errors="replace"),
            )
        parts.append(body.decode("utf-8", errors="replace").strip())
        logger.debug(f"Downloaded {item.file_url} ({len(body)} bytes)")

    content = ITEM_SEPARATOR.join(parts)
    if not content.strip():
        raise NoTextOutputError(
            f"All {len(selected)} text artifact(s) were empty"
        )

    logger.info(f"Assembled {len(content)} chars from {len(selected)} artifact(s)")
    return content
