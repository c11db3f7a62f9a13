import pytest


def test_reimport_guard() -> None:
    """
    Test that reimporting the scoped_event module results in an ImportError,
    preventing developers from wiping the process-wide registry.
    """
    import importlib
    import scoped_event

    with pytest.raises(
        ImportError,
        match="Module 'scoped_event' has already been imported and cannot be",
    ):
        importlib.reload(scoped_event)
