"""xCAT setup for EL9 (state-driven, re-runnable).

Core design goals:
- Remove and reinstall xCAT through go-xcat
- Patch the EL9 certificate breakages in place, keeping one original backup
- Best-effort service reinit, restart and verification
- Centralized logging
"""

__all__ = []
