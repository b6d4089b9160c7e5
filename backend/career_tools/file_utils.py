"""Helpers for resume files uploaded as plain text, PDF or Word documents."""
from typing import Optional, Tuple

MAX_UPLOAD_BYTES = 1 * 1024 * 1024

ALLOWED_CONTENT_TYPES = {
    "text/plain",
    "application/pdf",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "application/msword",
}


def format_file_size(num_bytes: int) -> str:
    """Human readable size: ``0 Bytes``, ``512 Bytes``, ``1.5 KB``, ``2 MB``."""
    if num_bytes <= 0:
        return "0 Bytes"
    k = 1024
    sizes = ["Bytes", "KB", "MB", "GB"]
    i = 0
    while i < len(sizes) - 1 and num_bytes >= k ** (i + 1):
        i += 1
    value = round(num_bytes / (k ** i), 2)
    # "1.50" -> "1.5", "2.00" -> "2"
    return f"{value:g} {sizes[i]}"


def validate_file_type(content_type: Optional[str]) -> bool:
    return (content_type or "").split(";")[0].strip().lower() in ALLOWED_CONTENT_TYPES


def validate_file_size(num_bytes: int, max_bytes: int = MAX_UPLOAD_BYTES) -> Tuple[bool, Optional[str]]:
    if num_bytes > max_bytes:
        return False, (
            f"File size ({format_file_size(num_bytes)}) exceeds the {format_file_size(max_bytes)} limit. "
            "Please use a smaller file."
        )
    return True, None


def read_as_text(contents: bytes) -> str:
    # No PDF/DOCX parsing: bytes are read as text, undecodable bytes replaced
    return contents.decode("utf-8", errors="replace")
