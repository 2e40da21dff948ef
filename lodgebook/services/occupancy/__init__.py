from lodgebook.services.occupancy.occupancy_reconciler import OccupancyReconciler

__all__ = ["OccupancyReconciler"]
