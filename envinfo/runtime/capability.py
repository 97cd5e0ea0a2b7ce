"""
Capability probing for optional dependencies.

envinfo has no hard dependency on the libraries it reports on. A probe
imports the provider module by name at call time and applies an accessor to
it; every outcome, including failure, is returned as a ``ProbeResult`` so
callers decide how to degrade without handling import errors themselves.
"""

import importlib
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional


class ProbeStatus(Enum):
    """Enumeration of possible probe outcomes."""
    AVAILABLE = "available"
    MISSING = "missing"
    INCOMPATIBLE = "incompatible"
    FAILED = "failed"


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of a single capability probe."""
    status: ProbeStatus
    value: Any = None
    error: Optional[BaseException] = None

    @property
    def available(self) -> bool:
        return self.status is ProbeStatus.AVAILABLE

    def value_or(self, default: Any) -> Any:
        """Return the probed value, or ``default`` if the probe did not succeed."""
        return self.value if self.available else default


def _is_missing_provider(error: ModuleNotFoundError, module_name: str) -> bool:
    """True if the provider itself is missing, not one of its own imports."""
    missing = error.name or ""
    return missing == module_name or module_name.startswith(missing + ".")


def probe_capability(module_name: str, accessor: Callable[[Any], Any]) -> ProbeResult:
    """
    Try to satisfy a capability from an optional provider module.

    Args:
        module_name: Dotted name of the provider module
        accessor: Callable receiving the imported module and returning the value

    Returns:
        ProbeResult with status:
        - AVAILABLE: accessor returned a value
        - MISSING: the provider module is not installed
        - INCOMPATIBLE: the provider is installed but cannot be loaded or lacks the API
        - FAILED: importing the provider or running the accessor raised any other error
    """
    try:
        module = importlib.import_module(module_name)
    except ModuleNotFoundError as e:
        if _is_missing_provider(e, module_name):
            return ProbeResult(ProbeStatus.MISSING, error=e)
        return ProbeResult(ProbeStatus.INCOMPATIBLE, error=e)
    except ImportError as e:
        return ProbeResult(ProbeStatus.INCOMPATIBLE, error=e)
    except Exception as e:
        # provider raised while initialising
        return ProbeResult(ProbeStatus.FAILED, error=e)

    try:
        return ProbeResult(ProbeStatus.AVAILABLE, value=accessor(module))
    except AttributeError as e:
        return ProbeResult(ProbeStatus.INCOMPATIBLE, error=e)
    except Exception as e:
        return ProbeResult(ProbeStatus.FAILED, error=e)
