"""
Configuration for digrams corpus passes.

Settings are plain dataclasses validated in ``__post_init__``. They can be
built in code or loaded from a YAML file with :func:`load_config`.

Example:
    >>> config = PipelineConfig(
    ...     profile=ENGLISH,
    ...     oracle=OracleConfig(backend="spellchecker", language="en"),
    ... )
    >>> config.profile.interior_delimiter
    "'"
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Literal

import yaml

from digrams.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


# =============================================================================
# LANGUAGE PROFILES
# =============================================================================


@dataclass(frozen=True)
class LanguageProfile:
    """
    Tokenizer parameters for one language variant.

    A word is a run of ``letters`` optionally chained to further runs by a
    single ``interior_delimiter`` ("guarda-chuva", "don't"). Matching is
    case-insensitive, so ``letters`` only needs the lowercase forms.

    Attributes:
        name: Short profile name ("pt", "en", ...).
        letters: Every character that may appear inside a letter run.
        interior_delimiter: Single character joining letter runs.
        sentence_terminator: Character that ends a sentence.
        max_interior_joins: Maximum number of delimiters in one word
            (None = unbounded).
    """

    name: str
    letters: str
    interior_delimiter: str
    sentence_terminator: str = "."
    max_interior_joins: int | None = None

    def __post_init__(self):
        """Validate profile."""
        if not self.name:
            raise ConfigurationError("profile name must not be empty")
        if not self.letters:
            raise ConfigurationError("letters must not be empty")
        if len(self.interior_delimiter) != 1:
            raise ConfigurationError(
                f"interior_delimiter must be a single character, "
                f"got {self.interior_delimiter!r}"
            )
        if self.interior_delimiter in self.letters:
            raise ConfigurationError(
                f"interior_delimiter {self.interior_delimiter!r} cannot also be a letter"
            )
        if len(self.sentence_terminator) != 1 or self.sentence_terminator.isspace():
            raise ConfigurationError(
                f"sentence_terminator must be a single non-space character, "
                f"got {self.sentence_terminator!r}"
            )
        if self.max_interior_joins is not None and self.max_interior_joins < 0:
            raise ConfigurationError(
                f"max_interior_joins must be >= 0, got {self.max_interior_joins}"
            )


# European Portuguese: extended Latin letters, hyphenated compounds of any length
PORTUGUESE = LanguageProfile(
    name="pt",
    letters="abcdefghijklmnopqrstuvwxyzãõàáéíóúâêôç",
    interior_delimiter="-",
)

# English: plain ASCII letters, one apostrophe for contractions
ENGLISH = LanguageProfile(
    name="en",
    letters="abcdefghijklmnopqrstuvwxyz",
    interior_delimiter="'",
    max_interior_joins=1,
)

BUILTIN_PROFILES: dict[str, LanguageProfile] = {
    PORTUGUESE.name: PORTUGUESE,
    ENGLISH.name: ENGLISH,
}


def get_profile(name: str) -> LanguageProfile:
    """
    Look up a built-in language profile by name.

    Raises:
        ConfigurationError: If no profile has that name.
    """
    try:
        return BUILTIN_PROFILES[name.lower()]
    except KeyError:
        raise ConfigurationError(
            f"Unknown language profile {name!r}. Available: {sorted(BUILTIN_PROFILES)}"
        ) from None


# =============================================================================
# ORACLE / PIPELINE CONFIG
# =============================================================================

OracleBackend = Literal["spellchecker", "enchant"]
CachePolicy = Literal["shared", "per_shard"]

# Hunspell dictionary tag used by the enchant backend for a profile name
ENCHANT_TAGS: dict[str, str] = {
    "pt": "pt_PT",
    "en": "en_GB",
}


@dataclass
class OracleConfig:
    """
    Configuration for the lexical oracle.

    ``language`` is a pyspellchecker language code ("pt", "en") for the
    spellchecker backend, or an enchant/Hunspell tag ("pt_PT", "en_GB")
    for the enchant backend. With the enchant backend a bare profile
    name is mapped to its tag through ENCHANT_TAGS, so the default "pt"
    becomes "pt_PT". ``dictionary`` overrides it with a local
    file: a pyspellchecker JSON word-frequency file, or an enchant
    personal word list.

    Example:
        >>> OracleConfig(backend="enchant", language="pt_PT")
    """

    backend: OracleBackend = "spellchecker"
    language: str = "pt"
    dictionary: Path | None = None
    distance: int = 2  # pyspellchecker edit distance
    extra_words: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self):
        """Validate configuration."""
        valid_backends = ("spellchecker", "enchant")
        if self.backend not in valid_backends:
            raise ConfigurationError(
                f"backend must be one of {valid_backends}, got {self.backend!r}"
            )
        if self.distance < 1:
            raise ConfigurationError(f"distance must be >= 1, got {self.distance}")
        if self.dictionary is not None:
            self.dictionary = Path(self.dictionary)
        self.extra_words = frozenset(self.extra_words)
        if self.backend == "enchant":
            self.language = ENCHANT_TAGS.get(self.language, self.language)


@dataclass
class PipelineConfig:
    """
    Configuration for one corpus pass.

    All options have sensible defaults for European Portuguese.

    Example:
        >>> config = PipelineConfig(workers=4, cache_policy="shared")
        >>> config.normalization_form
        'NFC'
    """

    profile: LanguageProfile = PORTUGUESE
    oracle: OracleConfig = field(default_factory=OracleConfig)

    # Unicode composition applied to the whole corpus before tokenizing
    normalization_form: Literal["NFC", "NFKC"] = "NFC"

    # Correction heuristics
    muted_letters: str = "cp"  # letters dropped by the 1990 orthographic agreement
    accent_table: dict[str, str] | None = None  # None = built-in Portuguese table

    # Scale-out
    workers: int = 1
    cache_policy: CachePolicy = "shared"

    def __post_init__(self):
        """Validate configuration."""
        valid_forms = ("NFC", "NFKC")
        if self.normalization_form not in valid_forms:
            raise ConfigurationError(
                f"normalization_form must be one of {valid_forms}, "
                f"got {self.normalization_form!r}"
            )
        if self.workers < 1:
            raise ConfigurationError(f"workers must be >= 1, got {self.workers}")
        valid_policies = ("shared", "per_shard")
        if self.cache_policy not in valid_policies:
            raise ConfigurationError(
                f"cache_policy must be one of {valid_policies}, got {self.cache_policy!r}"
            )
        if self.accent_table is not None:
            for source, target in self.accent_table.items():
                if len(source) != 1 or len(target) != 1:
                    raise ConfigurationError(
                        f"accent_table entries must map one character to one "
                        f"character, got {source!r} -> {target!r}"
                    )

    def with_profile(self, profile: LanguageProfile) -> PipelineConfig:
        """Return a copy using another language profile."""
        return replace(self, profile=profile)


# =============================================================================
# YAML LOADING
# =============================================================================


def _profile_from_yaml(value: Any) -> LanguageProfile:
    if isinstance(value, str):
        return get_profile(value)
    if isinstance(value, dict):
        try:
            return LanguageProfile(**value)
        except TypeError as e:
            raise ConfigurationError(f"Invalid profile mapping: {e}") from e
    raise ConfigurationError(f"profile must be a name or a mapping, got {value!r}")


def config_from_dict(data: dict[str, Any]) -> PipelineConfig:
    """
    Build a PipelineConfig from a plain mapping (as parsed from YAML).

    Raises:
        ConfigurationError: On unknown keys or invalid values.
    """
    data = dict(data)
    kwargs: dict[str, Any] = {}

    if "profile" in data:
        kwargs["profile"] = _profile_from_yaml(data.pop("profile"))

    if "oracle" in data:
        oracle_data = data.pop("oracle") or {}
        if not isinstance(oracle_data, dict):
            raise ConfigurationError(f"oracle must be a mapping, got {oracle_data!r}")
        oracle_data = dict(oracle_data)
        if "extra_words" in oracle_data:
            oracle_data["extra_words"] = frozenset(oracle_data["extra_words"] or ())
        try:
            kwargs["oracle"] = OracleConfig(**oracle_data)
        except TypeError as e:
            raise ConfigurationError(f"Invalid oracle section: {e}") from e

    try:
        return PipelineConfig(**kwargs, **data)
    except TypeError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def load_config(path: str | Path) -> PipelineConfig:
    """
    Load a PipelineConfig from a YAML file.

    Example file::

        profile: pt
        normalization_form: NFKC
        workers: 4
        oracle:
          backend: enchant
          language: pt_PT

    Raises:
        ConfigurationError: If the file is missing, malformed or invalid.
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Malformed YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")

    config = config_from_dict(data)
    logger.debug("Loaded config from %s: profile=%s", path, config.profile.name)
    return config
