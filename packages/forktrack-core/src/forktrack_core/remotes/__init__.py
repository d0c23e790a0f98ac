from .models import ReconcileOutcome, ReconcileReport, ReconcileResult, ReconcileStats
from .reconciler import UpstreamReconciler

__all__ = [
    "ReconcileOutcome",
    "ReconcileReport",
    "ReconcileResult",
    "ReconcileStats",
    "UpstreamReconciler",
]
