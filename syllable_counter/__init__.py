"""Syllable Counter — per-line syllable annotations for editable text.

WHY: Poets and lyricists meter their lines by syllable count. This
package estimates syllables per line and keeps those counts displayed
beside a scrolling, changing text view without recounting the whole
document on every keystroke.

HOW: Two layers — a pure estimator (core.estimator) and a debounced,
non-overlapping annotation synchronizer (core.synchronizer) that reads
from a pluggable editor host and writes to a pluggable renderer. The
CLI and HTTP API are thin hosts/renderers around the same synchronizer.

RULES:
- The estimator is pure; all state lives in the synchronizer
- Hosts and renderers are the only seams to the outside world
- One synchronizer per editing context
"""

__version__ = "0.1.0"
