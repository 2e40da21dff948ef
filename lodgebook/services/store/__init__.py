from lodgebook.services.store.hostel_store import HostelStore

__all__ = ["HostelStore"]
