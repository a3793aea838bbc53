"""Error taxonomy shared by the relay, the lookup service and the API layer.

Each error carries the HTTP status it maps to and a message that is safe to
show to the operator. Backend detail (store or upstream) is logged, never
put in ``message``.
"""
from typing import Optional


class FabcastError(Exception):
    status_code = 500
    default_message = "Internal server error."

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationFailed(FabcastError):
    """Bad or missing input; the caller's fault, never retried."""
    status_code = 400
    default_message = "Invalid request."


class StoreFailure(Exception):
    """Raised by state store backends; carries backend detail for logs only."""


class StoreUnavailable(FabcastError):
    status_code = 500
    default_message = "Could not reach the overlay state store."


class PlayerNotFound(FabcastError):
    status_code = 404

    def __init__(self, player_id: str) -> None:
        self.player_id = player_id
        super().__init__(
            f'No player found with ID "{player_id}". Double-check the GEM ID and try again.'
        )


class UpstreamUnreachable(FabcastError):
    status_code = 502
    default_message = (
        "Could not reach the FAB leaderboard. Check your internet connection and try again."
    )


class UpstreamError(FabcastError):
    status_code = 502

    def __init__(self, upstream_status: int) -> None:
        self.upstream_status = upstream_status
        super().__init__(
            f"The FAB leaderboard returned an error ({upstream_status}). Try again in a moment."
        )


class UpstreamFormatError(FabcastError):
    status_code = 502
    default_message = (
        "Could not read data from the FAB leaderboard. The page format may have changed."
    )
