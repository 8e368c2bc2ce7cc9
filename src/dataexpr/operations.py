"""Built-in operations, one Operation constant per expression name.

Use these to assemble custom packs, e.g. ``{"$plus": operations.ADD}``.
"""

from ._definitions import *  # noqa: F403
from ._definitions import __all__  # noqa: F401
