"""Field change detection and notification dispatch."""

from address_watch.detection.detector import FieldChangeDetector
from address_watch.detection.dispatcher import CallbackRegistry

__all__ = ["CallbackRegistry", "FieldChangeDetector"]
