"""
Core services — locate, run, shim, resolve, orchestrate.

Leaves first: the locator and runner depend on nothing else here;
the shim installer needs a located tool; the resolver reads settings
and properties; the planner ties all of them together.
"""

from elide_bridge.core.services.orchestration import (  # noqa: F401
    OrchestrationPlanner,
    probe_version,
)
from elide_bridge.core.services.policy_resolver import resolve  # noqa: F401
from elide_bridge.core.services.process_runner import ProcessRunner  # noqa: F401
from elide_bridge.core.services.shim_installer import (  # noqa: F401
    default_shim_path,
    ensure_shim,
)
from elide_bridge.core.services.tool_locator import locate  # noqa: F401
