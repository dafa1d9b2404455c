"""Core estimation and synchronization modules.

WHY: The core package is the part of the counter that does real work —
the syllable heuristic and the pass engine that decides what to recount.
Everything else adapts it to a particular host or display.

HOW: estimator.py is the pure per-line function, models.py and
settings.py are the shared records, scheduler.py is the debounce
primitive, and synchronizer.py ties them together.

RULES:
- No module here performs I/O
- models.py is the contract with hosts and renderers — change with care
"""

from syllable_counter.core.estimator import estimate_syllables

__all__ = ["estimate_syllables"]
