"""Application layer: the ``App`` context, refresh scheduling and workflows.

Submodules are imported directly (``lazyjj.app.push`` and so on); only the
context types are re-exported here.
"""

from .state import App, DirtyFlags, View

__all__ = ["App", "DirtyFlags", "View"]
