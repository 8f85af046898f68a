"""Content sniffing service.

Detects the MIME type of a file from its leading bytes, following the WHATWG
MIME Sniffing Standard. Client-declared content types are never consulted.
"""

from dataclasses import dataclass

# Number of leading bytes considered when sniffing
SNIFF_LENGTH = 512

DEFAULT_CONTENT_TYPE = "application/octet-stream"
TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"
HTML_CONTENT_TYPE = "text/html; charset=utf-8"

_WHITESPACE = b"\t\n\x0c\r "
_TAG_TERMINATORS = b" >"
_BINARY_BYTES = frozenset(
    list(range(0x00, 0x09)) + [0x0B] + list(range(0x0E, 0x1B)) + list(range(0x1C, 0x20))
)


def _first_non_whitespace(data: bytes) -> int:
    index = 0
    while index < len(data) and data[index] in _WHITESPACE:
        index += 1
    return index


@dataclass(frozen=True)
class ExactSignature:
    """Prefix that must match byte for byte."""

    pattern: bytes
    content_type: str

    def match(self, data: bytes, first_non_ws: int) -> str | None:
        if data.startswith(self.pattern):
            return self.content_type
        return None


@dataclass(frozen=True)
class MaskedSignature:
    """Prefix compared after AND-ing each data byte with a mask byte."""

    mask: bytes
    pattern: bytes
    content_type: str
    skip_whitespace: bool = False

    def match(self, data: bytes, first_non_ws: int) -> str | None:
        if self.skip_whitespace:
            data = data[first_non_ws:]
        if len(self.pattern) != len(self.mask) or len(data) < len(self.pattern):
            return None
        for index, expected in enumerate(self.pattern):
            if data[index] & self.mask[index] != expected:
                return None
        return self.content_type


@dataclass(frozen=True)
class HTMLSignature:
    """Case-insensitive HTML tag followed by a space or '>'."""

    tag: bytes

    def match(self, data: bytes, first_non_ws: int) -> str | None:
        data = data[first_non_ws:]
        if len(data) < len(self.tag) + 1:
            return None
        for index, expected in enumerate(self.tag):
            actual = data[index]
            if ord("A") <= expected <= ord("Z"):
                actual &= 0xDF
            if actual != expected:
                return None
        if data[len(self.tag)] not in _TAG_TERMINATORS:
            return None
        return HTML_CONTENT_TYPE


class MP4Signature:
    """ISO base media file with an 'mp4' brand in its ftyp box."""

    def match(self, data: bytes, first_non_ws: int) -> str | None:
        if len(data) < 12:
            return None
        box_size = int.from_bytes(data[:4], "big")
        if len(data) < box_size or box_size % 4 != 0:
            return None
        if data[4:8] != b"ftyp":
            return None
        for start in range(8, box_size, 4):
            if start == 12:
                # Skip the minor version field
                continue
            if data[start : start + 3] == b"mp4":
                return "video/mp4"
        return None


class TextSignature:
    """Plain text: no binary control bytes after leading whitespace."""

    def match(self, data: bytes, first_non_ws: int) -> str | None:
        for byte in data[first_non_ws:]:
            if byte in _BINARY_BYTES:
                return None
        return TEXT_CONTENT_TYPE


_RIFF_MASK = b"\xff\xff\xff\xff\x00\x00\x00\x00\xff\xff\xff\xff"

SIGNATURES = (
    HTMLSignature(b"<!DOCTYPE HTML"),
    HTMLSignature(b"<HTML"),
    HTMLSignature(b"<HEAD"),
    HTMLSignature(b"<SCRIPT"),
    HTMLSignature(b"<IFRAME"),
    HTMLSignature(b"<H1"),
    HTMLSignature(b"<DIV"),
    HTMLSignature(b"<FONT"),
    HTMLSignature(b"<TABLE"),
    HTMLSignature(b"<A"),
    HTMLSignature(b"<STYLE"),
    HTMLSignature(b"<TITLE"),
    HTMLSignature(b"<B"),
    HTMLSignature(b"<BODY"),
    HTMLSignature(b"<BR"),
    HTMLSignature(b"<P"),
    HTMLSignature(b"<!--"),
    MaskedSignature(b"\xff\xff\xff\xff\xff", b"<?xml", "text/xml; charset=utf-8", skip_whitespace=True),
    ExactSignature(b"%PDF-", "application/pdf"),
    ExactSignature(b"%!PS-Adobe-", "application/postscript"),
    # Byte order marks
    MaskedSignature(b"\xff\xff\x00\x00", b"\xfe\xff\x00\x00", "text/plain; charset=utf-16be"),
    MaskedSignature(b"\xff\xff\x00\x00", b"\xff\xfe\x00\x00", "text/plain; charset=utf-16le"),
    MaskedSignature(b"\xff\xff\xff\x00", b"\xef\xbb\xbf\x00", TEXT_CONTENT_TYPE),
    # Images
    ExactSignature(b"\x00\x00\x01\x00", "image/x-icon"),
    ExactSignature(b"\x00\x00\x02\x00", "image/x-icon"),
    ExactSignature(b"BM", "image/bmp"),
    ExactSignature(b"GIF87a", "image/gif"),
    ExactSignature(b"GIF89a", "image/gif"),
    MaskedSignature(
        b"\xff\xff\xff\xff\x00\x00\x00\x00\xff\xff\xff\xff\xff\xff",
        b"RIFF\x00\x00\x00\x00WEBPVP",
        "image/webp",
    ),
    ExactSignature(b"\x89PNG\r\n\x1a\n", "image/png"),
    ExactSignature(b"\xff\xd8\xff", "image/jpeg"),
    # Audio and video
    MaskedSignature(_RIFF_MASK, b"FORM\x00\x00\x00\x00AIFF", "audio/aiff"),
    MaskedSignature(b"\xff\xff\xff", b"ID3", "audio/mpeg"),
    MaskedSignature(b"\xff\xff\xff\xff\xff", b"OggS\x00", "application/ogg"),
    MaskedSignature(b"\xff" * 8, b"MThd\x00\x00\x00\x06", "audio/midi"),
    MaskedSignature(_RIFF_MASK, b"RIFF\x00\x00\x00\x00AVI ", "video/avi"),
    MaskedSignature(_RIFF_MASK, b"RIFF\x00\x00\x00\x00WAVE", "audio/wave"),
    MP4Signature(),
    ExactSignature(b"\x1a\x45\xdf\xa3", "video/webm"),
    # Fonts
    MaskedSignature(b"\x00" * 34 + b"\xff\xff", b"\x00" * 34 + b"LP", "application/vnd.ms-fontobject"),
    ExactSignature(b"\x00\x01\x00\x00", "font/ttf"),
    ExactSignature(b"OTTO", "font/otf"),
    ExactSignature(b"ttcf", "font/collection"),
    ExactSignature(b"wOFF", "font/woff"),
    ExactSignature(b"wOF2", "font/woff2"),
    # Archives
    ExactSignature(b"\x1f\x8b\x08", "application/x-gzip"),
    ExactSignature(b"PK\x03\x04", "application/zip"),
    ExactSignature(b"Rar!\x1a\x07\x00", "application/x-rar-compressed"),
    ExactSignature(b"Rar!\x1a\x07\x01\x00", "application/x-rar-compressed"),
    ExactSignature(b"\x00asm", "application/wasm"),
    TextSignature(),
)


def detect_content_type(data: bytes) -> str:
    """Detect the MIME type of data from its leading bytes.

    Only the first ``SNIFF_LENGTH`` bytes are considered. The result is always
    a valid MIME type; unrecognized binary data is ``application/octet-stream``.

    Examples:
        >>> detect_content_type(b"\\x89PNG\\r\\n\\x1a\\n")
        'image/png'
        >>> detect_content_type(b"hello")
        'text/plain; charset=utf-8'
    """
    data = data[:SNIFF_LENGTH]
    first_non_ws = _first_non_whitespace(data)
    for signature in SIGNATURES:
        content_type = signature.match(data, first_non_ws)
        if content_type is not None:
            return content_type
    return DEFAULT_CONTENT_TYPE
