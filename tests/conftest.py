"""Shared pytest fixtures for bookshelf tests."""

import os
import tempfile

# Keep config and log files out of the real home directory. Must run
# before bookshelf.config.constants is imported.
os.environ.setdefault("BOOKSHELF_CONFIG_DIR", tempfile.mkdtemp(prefix="bookshelf-test-"))

import pytest  # noqa: E402

from bookshelf.ui.categories.category_presenter import CategoryListPresenter  # noqa: E402
from fakes import FakeDataSource, FakeReachability, make_categories  # noqa: E402


@pytest.fixture
def sample_categories():
    """The three-category collection used across presenter tests."""
    return make_categories("Fiction", "Nonfiction", "Science")


@pytest.fixture
def data_source():
    return FakeDataSource()


@pytest.fixture
def reachability():
    return FakeReachability(reachable=True)


@pytest.fixture
def updates():
    """Collects every view model the presenter publishes."""
    return []


@pytest.fixture
def presenter(data_source, reachability, updates):
    presenter = CategoryListPresenter(
        data_source, reachability, on_state_update=updates.append
    )
    yield presenter
    presenter.close()
