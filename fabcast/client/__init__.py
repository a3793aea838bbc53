"""Operator and display clients for the overlay API."""
from fabcast.client.api_client import ApiResult, OverlayApiClient
from fabcast.client.control_panel import ControlPanel
from fabcast.client.overlay_poller import OverlayPoller
from fabcast.client.slot_controller import ActionState, SlotController

__all__ = [
    "ActionState",
    "ApiResult",
    "ControlPanel",
    "OverlayApiClient",
    "OverlayPoller",
    "SlotController",
]
