"""Heuristic syllable estimation for a line of English text.

WHY: Writers of verse and lyrics want a running syllable count per line.
A vowel-group heuristic is cheap (linear in line length), needs no
dictionary, and is good enough for metering by eye.

HOW: The line is lowercased and every non-letter becomes whitespace.
Each remaining word counts its maximal vowel runs, then two endings are
corrected: a silent trailing "e" and a consonant + "le" ending.

RULES:
- Vowels are a, e, i, o, u and y
- Single-letter words always count as one syllable
- Silent-e decrement runs BEFORE the consonant+le increment and applies
  to "-le" endings too ("apple" → 2, "table" → 2, "whole" → 1)
- Every non-empty word contributes at least one syllable
- Empty or letterless lines count as zero
- Never raises: unexpected input is logged and counted as zero
"""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

VOWELS = frozenset("aeiouy")

# Anything that is not a lowercase ASCII letter separates words.
_NON_LETTER_RE = re.compile(r"[^a-z]")


def count_word_syllables(word: str) -> int:
    """Estimate syllables in a single lowercase, letters-only word.

    RULES:
    - One letter → 1
    - Count vowel groups, then apply silent-e and consonant+le in order
    - Floor at 1
    """
    if len(word) == 1:
        return 1

    syllables = 0
    prev_vowel = False
    for ch in word:
        is_vowel = ch in VOWELS
        if is_vowel and not prev_vowel:
            syllables += 1
        prev_vowel = is_vowel

    # Silent e ("make", "stone"). Also fires for "-le" words, whose final
    # group is restored by the consonant+le rule below ("apple" 2 → 1 → 2).
    if word.endswith("e") and syllables > 1:
        syllables -= 1

    # Consonant + le forms its own syllable ("apple", "table")
    if word.endswith("le") and len(word) > 2 and word[-3] not in VOWELS:
        syllables += 1

    return max(syllables, 1)


def estimate_syllables(line: str) -> int:
    """Estimate the total number of syllables in a line of text.

    WHY: This is the per-line function the synchronizer calls for every
    candidate line. It must be pure and must never take down a pass.

    HOW: Normalizes the line, splits on whitespace runs, and sums
    count_word_syllables() over the words.

    RULES:
    - Same input always yields the same output (no shared state)
    - Returns 0 for empty, whitespace-only, or letterless lines
    - Returns 0 (and logs) for non-string input or internal failure

    Args:
        line: One line of document text.

    Returns:
        Non-negative syllable estimate.
    """
    try:
        normalized = _NON_LETTER_RE.sub(" ", line.lower()).strip()
        if not normalized:
            return 0
        return sum(count_word_syllables(word) for word in normalized.split() if word)
    except Exception:
        logger.exception("Error counting syllables for %r", line)
        return 0
