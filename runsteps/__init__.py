"""Status-gated action runner for build and provisioning scripts.

``runsteps release clean`` runs each named action in order and stops at the
first one that fails.
"""

from __future__ import annotations

__all__ = ["__version__"]
__version__ = "0.1.0"
