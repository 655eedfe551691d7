"""Input decoding for JSON documents.

JSON text is expected to be UTF-8. A byte order mark selects UTF-8, UTF-16 or
UTF-32 explicitly and is removed from the text; without one the bytes are
decoded as UTF-8, replacing undecodable sequences rather than failing.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Dict, List, Optional, Tuple

DEFAULT_ENCODING = "utf-8"


class DetectionMethod(Enum):
    """How the input encoding was chosen."""

    BOM = "bom"
    UTF8_VALIDATION = "utf8_validation"
    FALLBACK = "fallback"


@dataclass
class DecodedInput:
    """Decoded JSON text plus how it was obtained.

    Attributes:
        text: The decoded text without any byte order mark
        encoding: Codec name used for decoding
        method: Detection method used
        issues: Problems found while decoding
    """

    text: str
    encoding: str
    method: DetectionMethod
    issues: List[str] = field(default_factory=list)


class BOMDetector:
    """Byte Order Mark (BOM) detection for the Unicode encodings JSON allows."""

    BOM_PATTERNS: ClassVar[Dict[bytes, str]] = {
        b"\xef\xbb\xbf": "utf-8",
        b"\xff\xfe": "utf-16-le",
        b"\xfe\xff": "utf-16-be",
        b"\xff\xfe\x00\x00": "utf-32-le",
        b"\x00\x00\xfe\xff": "utf-32-be",
    }

    def detect(self, data: bytes) -> Optional[Tuple[str, int]]:
        """Detect encoding based on BOM.

        Returns:
            ``(encoding, bom_length)`` if a BOM is present, None otherwise
        """
        if not data:
            return None

        # UTF-32 LE starts with the UTF-16 LE mark, so test longer marks first
        for bom_bytes, encoding in sorted(
            self.BOM_PATTERNS.items(), key=lambda x: len(x[0]), reverse=True
        ):
            if data.startswith(bom_bytes):
                return encoding, len(bom_bytes)
        return None


def decode_input(data: bytes) -> DecodedInput:
    """Decode raw JSON bytes to text.

    Args:
        data: File contents as read from disk

    Returns:
        DecodedInput with the text and detection metadata
    """
    detected = BOMDetector().detect(data)
    if detected is not None:
        encoding, bom_length = detected
        payload = data[bom_length:]
        try:
            return DecodedInput(payload.decode(encoding), encoding, DetectionMethod.BOM)
        except UnicodeDecodeError as e:
            return DecodedInput(
                payload.decode(encoding, errors="replace"),
                encoding,
                DetectionMethod.BOM,
                [f"Invalid {encoding} data after byte order mark: {e.reason}"],
            )

    try:
        return DecodedInput(
            data.decode(DEFAULT_ENCODING),
            DEFAULT_ENCODING,
            DetectionMethod.UTF8_VALIDATION,
        )
    except UnicodeDecodeError as e:
        return DecodedInput(
            data.decode(DEFAULT_ENCODING, errors="replace"),
            DEFAULT_ENCODING,
            DetectionMethod.FALLBACK,
            [f"Input is not valid UTF-8 at byte {e.start}; "
             "undecodable bytes were replaced"],
        )
