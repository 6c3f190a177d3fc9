"""Pick the component worth keeping."""

from __future__ import annotations

from collections.abc import Sequence

from commresolve.exceptions import TopologyError
from commresolve.resolver.components import Component


def pick_largest(components: Sequence[Component]) -> Component:
    """Return the component with the most server (non-client) nodes.

    Ties go to the component discovered first, i.e. the one holding the
    lowest node index.
    """
    if not components:
        raise TopologyError("No components to select from")
    return max(components, key=lambda c: (c.server_count, -c.start_index))
