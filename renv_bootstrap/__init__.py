"""renv-bootstrap: set up the R environment for the analysis project.

Core design goals:
- Fail fast, safe to re-run
- Idempotent steps (marker-guarded Makevars patch)
- Package manager behind a small client interface
- Host description injected, not read ad hoc
"""

__all__ = []
