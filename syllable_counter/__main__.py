"""Package entry point for ``python -m syllable_counter``.

WHY: Users run the counter as ``python -m syllable_counter poem.txt``
without installing the console script.

HOW: Delegates to the CLI's main() function.
"""

import sys

from syllable_counter.cli import main

if __name__ == "__main__":
    sys.exit(main())
