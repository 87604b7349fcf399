"""Extension to MIME type lookup.

A static table is used instead of the platform MIME database so results
are identical on every host.
"""

from typing import Optional

DEFAULT_MIME_TYPE = "application/octet-stream"

MIME_TYPES = {
    # Text and web
    "txt": "text/plain",
    "text": "text/plain",
    "html": "text/html",
    "htm": "text/html",
    "css": "text/css",
    "js": "text/javascript",
    "mjs": "text/javascript",
    "json": "application/json",
    "xml": "application/xml",
    "md": "text/markdown",
    "markdown": "text/markdown",
    "yaml": "text/yaml",
    "yml": "text/yaml",
    "toml": "text/x-toml",
    # Documents
    "pdf": "application/pdf",
    "doc": "application/msword",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "xls": "application/vnd.ms-excel",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "ppt": "application/vnd.ms-powerpoint",
    "pptx": "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    # Archives
    "zip": "application/zip",
    "tar": "application/x-tar",
    "gz": "application/gzip",
    "gzip": "application/gzip",
    "rar": "application/vnd.rar",
    "7z": "application/x-7z-compressed",
    # Images
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "gif": "image/gif",
    "webp": "image/webp",
    "svg": "image/svg+xml",
    "ico": "image/x-icon",
    # Audio and video
    "mp3": "audio/mpeg",
    "wav": "audio/wav",
    "ogg": "audio/ogg",
    "flac": "audio/flac",
    "mp4": "video/mp4",
    "webm": "video/webm",
    "avi": "video/x-msvideo",
    "mkv": "video/x-matroska",
    "mov": "video/quicktime",
    # Source code
    "rs": "text/x-rust",
    "ts": "text/typescript",
    "tsx": "text/typescript",
    "vue": "text/x-vue",
    "py": "text/x-python",
    "rb": "text/x-ruby",
    "go": "text/x-go",
    "java": "text/x-java",
    "c": "text/x-c",
    "h": "text/x-c",
    "cpp": "text/x-c++",
    "hpp": "text/x-c++",
    "cc": "text/x-c++",
    # Binaries
    "exe": "application/x-msdownload",
    "dll": "application/x-msdownload",
    "so": "application/x-sharedlib",
}


def guess_mime_type(extension: Optional[str]) -> Optional[str]:
    """
    Look up the MIME type for a lower-cased extension.

    Args:
        extension: Extension without the dot, or None

    Returns:
        MIME type string, the generic binary type for unknown extensions,
        or None when there is no extension
    """
    if extension is None:
        return None
    return MIME_TYPES.get(extension, DEFAULT_MIME_TYPE)
