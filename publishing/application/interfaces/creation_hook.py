"""Post-create notification hook injected into repositories."""

from collections.abc import Callable
from typing import Any

CreatedHook = Callable[[Any], None]
"""Called with the new entity after its creating transaction has committed."""
