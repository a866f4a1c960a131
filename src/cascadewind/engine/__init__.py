"""Delta and attribution engines."""

from cascadewind.engine.attribution import attribute, select_winners, unattributed
from cascadewind.engine.delta import diff, vanished

__all__ = ["attribute", "diff", "select_winners", "unattributed", "vanished"]
