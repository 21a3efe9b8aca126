#!/usr/bin/env python3

# Copyright 2025 Emasoft
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
encoding_resolver.py - Encoding detection and decoding for txt2epub

Guesses the byte encoding of a manuscript, decodes it leniently and reports
which encoding was detected and which codec was actually used. Detection and
decoding problems never raise: they degrade to UTF-8 with replacement
characters.
"""

from __future__ import annotations

import codecs
import logging
from pathlib import Path

import chardet
from chardet.universaldetector import UniversalDetector

from .common_constants import (
    AUTO_ENCODING,
    BOM,
    DEFAULT_ENCODING,
    DETECTION_CONFIDENCE_THRESHOLD,
    ENCODING_ALIASES,
    UNKNOWN_ENCODING,
)
from .models import ReadResult

# Default logger
logger = logging.getLogger(__name__)


def normalize_encoding(label: str | None) -> str:
    """
    Map an encoding label to its canonical codec name.

    Args:
        label: Label reported by the detector or given by the user

    Returns:
        Canonical codec name; DEFAULT_ENCODING for an empty label
    """
    if not label:
        return DEFAULT_ENCODING
    key = label.strip().lower()
    return ENCODING_ALIASES.get(key, key)


def is_encoding_supported(encoding: str) -> bool:
    """Return True if Python has a text codec registered under this name."""
    try:
        codecs.lookup(encoding)
        # Codecs such as base64 or rot13 exist but cannot decode bytes to str
        b"".decode(encoding)
    except (LookupError, TypeError, ValueError):
        return False
    return True


def strip_bom(text: str) -> str:
    """Remove a single leading byte-order mark."""
    if text.startswith(BOM):
        return text[1:]
    return text


def _detect_with_chardet(raw: bytes, logger: logging.Logger) -> tuple[str | None, float]:
    """Detect encoding using chardet.detect over the whole buffer."""
    result = chardet.detect(raw)
    encoding = result.get("encoding")
    confidence = result.get("confidence") or 0.0
    logger.debug(f"chardet.detect: {encoding} (confidence: {confidence})")
    return encoding, confidence


def _detect_with_universal(raw: bytes, logger: logging.Logger) -> tuple[str | None, float]:
    """Detect encoding using UniversalDetector (fed line by line)."""
    detector = UniversalDetector()
    for line in raw.splitlines(keepends=True):
        detector.feed(line)
        if detector.done:
            break
    detector.close()
    result = detector.result
    encoding = result.get("encoding")
    confidence = result.get("confidence") or 0.0
    logger.debug(f"UniversalDetector: {encoding} (confidence: {confidence})")
    return encoding, confidence


def detect_encoding(
    raw: bytes,
    method: str = "auto",
    confidence_threshold: float = DETECTION_CONFIDENCE_THRESHOLD,
    logger: logging.Logger | None = None,
) -> tuple[str | None, float]:
    """
    Guess the encoding of a byte buffer.

    Parameters:
    - raw: Bytes to analyze; every byte value is seen by the detector as is
    - method: Detection method to use
      - 'chardet': chardet.detect over the whole buffer
      - 'universal': UniversalDetector fed line by line, stops when confident
      - 'auto': Try chardet first, fall back to universal if confidence low
    - confidence_threshold: Minimum chardet confidence (only used with 'auto')
    - logger: Logger instance (uses module logger if None)

    Returns: (encoding label or None, confidence) tuple
    """
    if logger is None:
        logger = globals()["logger"]

    if method == "chardet":
        return _detect_with_chardet(raw, logger)
    elif method == "universal":
        return _detect_with_universal(raw, logger)
    elif method == "auto":
        encoding, confidence = _detect_with_chardet(raw, logger)
        if encoding and confidence >= confidence_threshold:
            return encoding, confidence
        logger.debug(f"chardet confidence {confidence} below threshold {confidence_threshold}, trying UniversalDetector")
        fallback, fallback_confidence = _detect_with_universal(raw, logger)
        if fallback:
            return fallback, fallback_confidence
        # Keep chardet's low-confidence guess rather than none at all
        return encoding, confidence
    else:
        raise ValueError(f"Unknown detection method: {method}")


def decode_bytes(raw: bytes, encoding: str, logger: logging.Logger | None = None) -> tuple[str, str]:
    """
    Decode bytes leniently.

    Falls back to DEFAULT_ENCODING when the requested codec is unknown or
    cannot decode leniently (some codecs, e.g. idna, reject the "replace"
    error handler). Undecodable sequences become U+FFFD.

    Returns: (decoded text, codec actually used) tuple
    """
    if logger is None:
        logger = globals()["logger"]

    if not is_encoding_supported(encoding):
        logger.warning(f"Encoding '{encoding}' is not supported, falling back to {DEFAULT_ENCODING}")
        return raw.decode(DEFAULT_ENCODING, errors="replace"), DEFAULT_ENCODING

    try:
        return raw.decode(encoding, errors="replace"), encoding
    except (UnicodeError, LookupError) as e:
        logger.warning(f"Decoding with '{encoding}' failed ({e}), falling back to {DEFAULT_ENCODING}")
        return raw.decode(DEFAULT_ENCODING, errors="replace"), DEFAULT_ENCODING


def resolve_encoding(
    raw: bytes,
    encoding_choice: str | None = AUTO_ENCODING,
    logger: logging.Logger | None = None,
) -> ReadResult:
    """
    Detect, decode and clean a whole-file byte buffer.

    Args:
        raw: File content
        encoding_choice: "auto" to use the detected encoding, or an explicit
            encoding name that overrides detection
        logger: Optional logger for debug output

    Returns:
        ReadResult with the BOM-free text, the raw detected label (or
        "unknown") and the codec used for decoding
    """
    if logger is None:
        logger = globals()["logger"]

    detected, confidence = detect_encoding(raw, logger=logger)

    if not encoding_choice or encoding_choice.strip().lower() == AUTO_ENCODING:
        target = normalize_encoding(detected)
    else:
        target = normalize_encoding(encoding_choice)
        logger.debug(f"Encoding override: {encoding_choice} -> {target}")

    text, used = decode_bytes(raw, target, logger=logger)
    if "\ufffd" in text:
        logger.warning(f"Undecodable bytes replaced while decoding with {used}")

    return ReadResult(
        text=strip_bom(text),
        detected_encoding=detected or UNKNOWN_ENCODING,
        used_encoding=used,
        confidence=confidence,
    )


def read_text_file(
    file_path: str | Path,
    encoding_choice: str | None = AUTO_ENCODING,
    logger: logging.Logger | None = None,
) -> ReadResult:
    """
    Read a whole text file and resolve its encoding.

    Args:
        file_path: Path to the manuscript
        encoding_choice: "auto" or an explicit encoding name
        logger: Optional logger for debug output

    Returns:
        ReadResult for the file content

    Raises:
        OSError: If the file cannot be read
    """
    if logger is None:
        logger = globals()["logger"]

    file_path = Path(file_path)
    raw = file_path.read_bytes()
    logger.debug(f"Read {len(raw)} bytes from {file_path}")
    result = resolve_encoding(raw, encoding_choice, logger=logger)
    logger.info(f"Decoded {file_path.name}: detected={result.detected_encoding}, used={result.used_encoding}")
    return result
