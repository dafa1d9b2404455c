"""Configuration constants, policy values, and .env loading.

WHY: Centralizes every tunable the synchronizer and the CLI/API layers
read, so defaults are easy to find, update, and override. Policy values
(visibility tolerance, padding, follow-up delay) are plain constants —
not buried in the pass logic — so they can be adjusted with confidence.

HOW: python-dotenv loads the .env file on import. User-facing defaults
are read from environment variables with hardcoded fallbacks. Policy
constants are module-level ints. load_settings() turns the env defaults
into a validated SynchronizerSettings model.

RULES:
- SYLLABLE_MAX_LINES, SYLLABLE_DEBOUNCE_MS, SYLLABLE_ONLY_VISIBLE_RANGE,
  SYLLABLE_SHOW_ZERO and SYLLABLE_VERBOSITY override the defaults
- Documented ranges (100–2000) are advisory; the settings model only
  enforces max_lines_to_process > 0 and debounce_interval_ms >= 0
- Policy constants are not user configuration and have no env override
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

from syllable_counter.core.settings import SynchronizerSettings

# Load .env from the working directory (where the tool is run from)
load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# ---------------------------------------------------------------------------
# User-facing defaults
# ---------------------------------------------------------------------------

DEFAULT_MAX_LINES_TO_PROCESS = int(os.getenv("SYLLABLE_MAX_LINES", "500"))
DEFAULT_DEBOUNCE_INTERVAL_MS = int(os.getenv("SYLLABLE_DEBOUNCE_MS", "500"))
DEFAULT_ONLY_VISIBLE_RANGE = _env_bool("SYLLABLE_ONLY_VISIBLE_RANGE", "true")
DEFAULT_SHOW_ZERO_SYLLABLES = _env_bool("SYLLABLE_SHOW_ZERO", "false")
DEFAULT_VERBOSITY = os.getenv("SYLLABLE_VERBOSITY", "verbose").strip().lower()

MAX_LINES_RANGE = (100, 2000)
"""Documented slider range for max_lines_to_process (min, max)."""

DEBOUNCE_INTERVAL_RANGE_MS = (100, 2000)
"""Documented slider range for debounce_interval_ms (min, max)."""

# ---------------------------------------------------------------------------
# Synchronizer policy constants
# ---------------------------------------------------------------------------

VISIBILITY_TOLERANCE = 100
"""Lines within this many geometry units of a viewport edge count as visible."""

RANGE_PADDING_LINES = 10
"""Extra lines annotated on each side of the visible range."""

FOLLOW_UP_DELAY_MS = 50
"""Delay before the single follow-up pass that absorbs coalesced triggers."""


def load_settings() -> SynchronizerSettings:
    """Build SynchronizerSettings from the environment-backed defaults.

    WHY: The CLI and API both start from the same defaults, and a bad
    value in .env should fail loudly at startup rather than mid-pass.

    HOW: Passes the module-level defaults through the pydantic model so
    the usual field constraints apply.

    RULES:
    - Raises pydantic.ValidationError for out-of-bounds env values
    """
    return SynchronizerSettings(
        max_lines_to_process=DEFAULT_MAX_LINES_TO_PROCESS,
        debounce_interval_ms=DEFAULT_DEBOUNCE_INTERVAL_MS,
        only_visible_range=DEFAULT_ONLY_VISIBLE_RANGE,
        show_zero_syllables=DEFAULT_SHOW_ZERO_SYLLABLES,
        verbosity=DEFAULT_VERBOSITY,
    )
