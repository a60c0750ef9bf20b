r"""@package rodrigues.__main__

Print the comparison table (see rodrigues.tabulate).
"""

import sys

from .tabulate import main


if __name__ == "__main__":
    sys.exit(main())
