"""
Bundled reference data.

`reference.yaml` is the canonical lock and command table.
"""

from importlib.resources import files
from importlib.resources.abc import Traversable

REFERENCE_FILE = "reference.yaml"


def bundled_reference() -> Traversable:
    """Location of the reference table shipped with the package."""
    return files(__name__).joinpath(REFERENCE_FILE)
