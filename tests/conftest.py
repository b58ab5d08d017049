import pytest


def pytest_sessionstart(session):
    """Configure quiet logging once before collection."""
    from comicshop.config import Settings
    from comicshop.logging import configure_logging

    configure_logging(Settings(env="test"))


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(item.path)

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)


@pytest.fixture(autouse=True)
def fresh_identities():
    """Every test starts from a fresh process's view of ids."""
    from comicshop.shared.identity import identities

    identities.reset()
    yield
    identities.reset()
