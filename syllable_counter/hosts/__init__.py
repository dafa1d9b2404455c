"""Editor host implementations.

WHY: The synchronizer reads document text, line geometry, and change
events through EditorHost. Each environment it runs in provides one.

HOW: base.py defines the ABC, memory.py a string-backed host with
uniform synthesized geometry, file.py a polling file-backed host.
"""

from syllable_counter.hosts.base import EditorHost
from syllable_counter.hosts.file import FileHost
from syllable_counter.hosts.memory import MemoryHost

__all__ = ["EditorHost", "FileHost", "MemoryHost"]
