import pytest

from compound_calc.core.environment import check_environment, require_environment
from compound_calc.errors import EnvironmentUnavailableError


def test_writable_directory_is_enabled(tmp_path):
    status = check_environment(tmp_path / "nested" / "history.db")

    assert status.enabled
    assert status.reason is None
    require_environment(status)


def test_blocked_directory_is_disabled_not_raised(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")

    status = check_environment(blocker / "history.db")

    assert not status.enabled
    assert "blocker" in status.reason
    with pytest.raises(EnvironmentUnavailableError):
        require_environment(status)
