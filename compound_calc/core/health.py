"""Health report used by the API health-check."""

from compound_calc.core.environment import EnvironmentStatus


def get_health(status: EnvironmentStatus) -> dict:
    """Service is up whenever this runs; history may still be disabled."""
    return {
        "status": "ok",
        "historyEnabled": status.enabled,
        "reason": status.reason,
    }
