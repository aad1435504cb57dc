"""Client side of the triage flow: API access, queue and card gestures."""

from .api_client import ApiError, DraftList, TriageApiClient
from .controller import TriageController
from .gesture import CardGesture, Direction, GestureState, InvalidTransition
from .notifications import Toast, ToastCenter, ToastKind
from .review_queue import ReviewQueue

__all__ = [
    "ApiError",
    "DraftList",
    "TriageApiClient",
    "TriageController",
    "CardGesture",
    "Direction",
    "GestureState",
    "InvalidTransition",
    "Toast",
    "ToastCenter",
    "ToastKind",
    "ReviewQueue",
]
