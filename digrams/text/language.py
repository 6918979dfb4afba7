"""
Language detection for picking a built-in profile.

Uses langdetect (port of Google's language-detection) on a sample of the
corpus. Only languages that have a built-in profile can be returned.
"""

from __future__ import annotations

import logging

from langdetect import DetectorFactory
from langdetect import detect as langdetect_detect
from langdetect.lang_detect_exception import LangDetectException

from digrams.config import BUILTIN_PROFILES, PORTUGUESE, LanguageProfile

logger = logging.getLogger(__name__)

# Make langdetect deterministic across runs
DetectorFactory.seed = 0

# Need sufficient text for reliable detection
MIN_DETECTION_CHARS = 20
SAMPLE_CHARS = 10_000


def detect_language(text: str, default: str = PORTUGUESE.name) -> str:
    """
    Detect the dominant language of text among the built-in profiles.

    Args:
        text: Corpus text (only the first SAMPLE_CHARS characters are used).
        default: Profile name returned when detection is not possible.

    Returns:
        A key of BUILTIN_PROFILES.
    """
    sample = text[:SAMPLE_CHARS]
    if len(sample.strip()) < MIN_DETECTION_CHARS:
        logger.warning("Too little text for language detection, using %r", default)
        return default

    try:
        lang = langdetect_detect(sample)
    except LangDetectException as e:
        logger.warning("Language detection failed (%s), using %r", e, default)
        return default

    if lang not in BUILTIN_PROFILES:
        logger.warning("Detected language %r has no profile, using %r", lang, default)
        return default

    logger.info("Detected corpus language: %s", lang)
    return lang


def detect_profile(text: str) -> LanguageProfile:
    """Return the built-in profile for the detected language of text."""
    return BUILTIN_PROFILES[detect_language(text)]
