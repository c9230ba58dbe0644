# -*- coding: utf-8 -*-
"""FastAPI download responses for export blobs."""

from __future__ import annotations

from fastapi.responses import Response

CSV_MEDIA_TYPE = "text/csv; charset=utf-8"
ICS_MEDIA_TYPE = "text/calendar; charset=utf-8"
TEXT_MEDIA_TYPE = "text/plain; charset=utf-8"


def download(content: str, filename: str, media_type: str) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def csv_download(content: str, filename: str) -> Response:
    if not filename.endswith(".csv"):
        filename = f"{filename}.csv"
    return download(content, filename, CSV_MEDIA_TYPE)


def ics_download(content: str, filename: str) -> Response:
    if not filename.endswith(".ics"):
        filename = f"{filename}.ics"
    return download(content, filename, ICS_MEDIA_TYPE)


def text_download(content: str, filename: str) -> Response:
    if not filename.endswith(".txt"):
        filename = f"{filename}.txt"
    return download(content, filename, TEXT_MEDIA_TYPE)
