# lodgebook/services/__init__.py
"""
Service layer root package.

- store: ``HostelStore``, the command and query surface
- occupancy: room occupant bookkeeping
- payment: the payment ledger
- analytics: pure read functions and reports
- export: payment listing and CSV export
- common: unit of work and command validation
"""

from lodgebook.services.store import HostelStore

__all__ = ["HostelStore"]
