"""Tests for the category list presenter."""

import pytest

from bookshelf.exceptions import FetchFailedError, IndexOutOfRangeError
from bookshelf.services.category_service import CategoryFetchResult
from bookshelf.ui.categories.category_presenter import (
    CategoryListPresenter,
    CategoryListVM,
    LoadState,
)

from fakes import FakeDataSource, FakeReachability, make_categories


def _loaded(presenter, data_source, categories):
    presenter.activate()
    data_source.succeed(categories)
    return presenter


class TestCategoryListVM:
    def test_defaults(self) -> None:
        vm = CategoryListVM()
        assert vm.items == ()
        assert vm.load_state is LoadState.IDLE
        assert vm.is_loading is False
        assert vm.is_offline is False
        assert vm.error_message == ""


class TestInitialState:
    def test_starts_idle_and_empty(self, presenter) -> None:
        assert presenter.load_state is LoadState.IDLE
        assert presenter.categories == ()
        assert presenter.query == ""
        assert presenter.item_count() == 0

    def test_placeholder_visible_before_activation(self, presenter) -> None:
        assert presenter.is_placeholder_visible is True

    def test_subscribes_to_reachability_once(self, presenter, reachability) -> None:
        assert len(reachability.subscribers) == 1

    def test_close_unsubscribes(self, presenter, reachability) -> None:
        presenter.close()
        presenter.close()
        assert reachability.subscribers == []


class TestActivate:
    def test_reachable_starts_fetch(self, presenter, data_source, updates) -> None:
        presenter.activate()
        assert presenter.load_state is LoadState.LOADING
        assert data_source.fetch_count == 1
        assert presenter.fetch_in_flight is True
        assert updates[-1].is_loading is True

    def test_unreachable_goes_offline_without_fetching(
        self, presenter, data_source, reachability, updates
    ) -> None:
        reachability.reachable = False
        presenter.activate()
        assert presenter.load_state is LoadState.OFFLINE
        assert data_source.fetch_count == 0
        assert updates[-1].is_offline is True

    def test_second_activate_while_loading_is_noop(self, presenter, data_source) -> None:
        presenter.activate()
        published = presenter.state
        presenter.activate()
        assert data_source.fetch_count == 1
        assert presenter.state == published

    def test_activate_after_load_refreshes(
        self, presenter, data_source, sample_categories
    ) -> None:
        _loaded(presenter, data_source, sample_categories)
        presenter.activate()
        assert data_source.fetch_count == 2
        assert presenter.load_state is LoadState.LOADING
        assert presenter.categories == sample_categories

    def test_activate_after_error_retries(self, presenter, data_source) -> None:
        presenter.activate()
        data_source.fail()
        presenter.activate()
        assert data_source.fetch_count == 2
        assert presenter.load_state is LoadState.LOADING
        assert presenter.error is None

    def test_data_source_raising_becomes_error_state(self, reachability, updates) -> None:
        class BrokenSource:
            def fetch_categories(self, callback):
                raise RuntimeError("no worker threads left")

        errors = []
        presenter = CategoryListPresenter(
            BrokenSource(), reachability, on_state_update=updates.append, on_error=errors.append
        )
        presenter.activate()
        assert presenter.load_state is LoadState.ERROR
        assert presenter.fetch_in_flight is False
        assert "no worker threads left" in errors[0].message

    def test_data_source_raising_after_callback_is_contained(
        self, reachability, updates, sample_categories
    ) -> None:
        class CallsBackThenRaises:
            def fetch_categories(self, callback):
                callback(CategoryFetchResult.success(sample_categories))
                raise RuntimeError("cleanup failed")

        presenter = CategoryListPresenter(
            CallsBackThenRaises(), reachability, on_state_update=updates.append
        )
        presenter.activate()
        assert presenter.load_state is LoadState.LOADED
        assert presenter.item_count() == 3
        assert presenter.error is None


class TestFetchCompleted:
    def test_success_loads_collection(
        self, presenter, data_source, sample_categories, updates
    ) -> None:
        _loaded(presenter, data_source, sample_categories)
        assert presenter.load_state is LoadState.LOADED
        assert presenter.categories == sample_categories
        assert presenter.fetch_in_flight is False
        assert updates[-1].items == sample_categories
        assert updates[-1].total_count == 3
        assert updates[-1].status_text == "3 categories"

    def test_success_replaces_wholesale(self, presenter, data_source) -> None:
        _loaded(presenter, data_source, make_categories("Fiction", "Science"))
        presenter.activate()
        data_source.succeed(make_categories("Manga"))
        assert [c.display_name for c in presenter.categories] == ["Manga"]

    def test_duplicates_tolerated(self, presenter, data_source) -> None:
        duplicates = make_categories("Fiction", "Fiction")
        _loaded(presenter, data_source, duplicates)
        assert presenter.item_count() == 2
        assert presenter.item(1) == presenter.item(0)

    def test_failure_sets_error_and_keeps_collection(
        self, presenter, data_source, sample_categories
    ) -> None:
        _loaded(presenter, data_source, sample_categories)
        presenter.activate()
        data_source.fail("server exploded")
        assert presenter.load_state is LoadState.ERROR
        assert presenter.categories == sample_categories
        assert presenter.item_count() == 3
        assert presenter.state.error_message == "server exploded"
        assert presenter.state.status_text == "Error: server exploded"

    def test_failure_notifies_error_callback(self, data_source, reachability) -> None:
        errors = []
        presenter = CategoryListPresenter(data_source, reachability, on_error=errors.append)
        presenter.activate()
        data_source.fail("timeout")
        assert len(errors) == 1
        assert isinstance(errors[0], FetchFailedError)

    def test_failure_does_not_retry(self, presenter, data_source) -> None:
        presenter.activate()
        data_source.fail()
        assert data_source.fetch_count == 1

    def test_success_clears_previous_error(
        self, presenter, data_source, sample_categories
    ) -> None:
        presenter.activate()
        data_source.fail()
        presenter.activate()
        data_source.succeed(sample_categories)
        assert presenter.error is None
        assert presenter.state.error_message == ""


class TestPlaceholderPolicy:
    def test_visible_while_first_load_in_flight(self, presenter, updates) -> None:
        presenter.activate()
        assert presenter.is_placeholder_visible is True
        assert updates[-1].is_placeholder_visible is True

    def test_empty_successful_load_withdraws_placeholder(
        self, presenter, data_source, updates
    ) -> None:
        presenter.activate()
        assert updates[-1].is_placeholder_visible is True
        data_source.succeed(())
        assert presenter.load_state is LoadState.LOADED
        assert updates[-1].is_placeholder_visible is False
        assert updates[-1].status_text == "0 categories"

    def test_background_refresh_keeps_placeholder_hidden(
        self, presenter, data_source, sample_categories, updates
    ) -> None:
        _loaded(presenter, data_source, sample_categories)
        presenter.activate()
        assert presenter.load_state is LoadState.LOADING
        assert updates[-1].is_placeholder_visible is False
        assert updates[-1].items == sample_categories
        assert updates[-1].status_text == "3 categories (refreshing)"

    def test_hidden_on_error(self, presenter, data_source) -> None:
        presenter.activate()
        data_source.fail()
        assert presenter.is_placeholder_visible is False

    def test_hidden_when_offline(self, presenter, reachability) -> None:
        reachability.reachable = False
        presenter.activate()
        assert presenter.is_placeholder_visible is False


class TestReachability:
    @pytest.mark.parametrize("setup", ["idle", "loading", "loaded", "error", "offline"])
    def test_loss_forces_offline_from_any_state(
        self, presenter, data_source, reachability, sample_categories, setup
    ) -> None:
        if setup == "loading":
            presenter.activate()
        elif setup == "loaded":
            _loaded(presenter, data_source, sample_categories)
        elif setup == "error":
            presenter.activate()
            data_source.fail()
        elif setup == "offline":
            reachability.set_reachable(False)

        reachability.set_reachable(False)
        assert presenter.load_state is LoadState.OFFLINE
        assert presenter.state.is_offline is True

    def test_each_loss_republishes(self, presenter, reachability, updates) -> None:
        reachability.set_reachable(False)
        reachability.set_reachable(False)
        offline_updates = [vm for vm in updates if vm.is_offline]
        assert len(offline_updates) == 2

    def test_regaining_network_does_not_retry(
        self, presenter, data_source, reachability
    ) -> None:
        reachability.set_reachable(False)
        reachability.set_reachable(True)
        assert presenter.load_state is LoadState.OFFLINE
        assert data_source.fetch_count == 0

    def test_activate_after_reconnect_loads(
        self, presenter, data_source, reachability, sample_categories
    ) -> None:
        reachability.reachable = False
        presenter.activate()
        reachability.set_reachable(True)
        presenter.activate()
        assert presenter.load_state is LoadState.LOADING
        data_source.succeed(sample_categories)
        assert presenter.load_state is LoadState.LOADED

    def test_activate_while_still_offline_stays_offline(
        self, presenter, data_source, reachability
    ) -> None:
        reachability.set_reachable(False)
        presenter.activate()
        assert presenter.load_state is LoadState.OFFLINE
        assert data_source.fetch_count == 0

    def test_completion_after_offline_is_stored_but_stays_offline(
        self, presenter, data_source, reachability, sample_categories
    ) -> None:
        presenter.activate()
        reachability.set_reachable(False)
        data_source.succeed(sample_categories)
        assert presenter.load_state is LoadState.OFFLINE
        assert presenter.categories == sample_categories
        assert presenter.fetch_in_flight is False
        assert presenter.is_placeholder_visible is False

    def test_failure_after_offline_stays_offline(
        self, presenter, data_source, reachability
    ) -> None:
        errors = []
        presenter.on_error = errors.append
        presenter.activate()
        reachability.set_reachable(False)
        data_source.fail()
        assert presenter.load_state is LoadState.OFFLINE
        assert errors == []

    def test_reactivating_with_fetch_in_flight_does_not_refetch(
        self, presenter, data_source, reachability, sample_categories
    ) -> None:
        presenter.activate()
        reachability.set_reachable(False)
        reachability.set_reachable(True)
        presenter.activate()
        assert data_source.fetch_count == 1
        assert presenter.load_state is LoadState.LOADING
        data_source.succeed(sample_categories)
        assert presenter.load_state is LoadState.LOADED

    def test_later_event_wins(
        self, presenter, data_source, reachability, sample_categories
    ) -> None:
        presenter.activate()
        data_source.succeed(sample_categories)
        reachability.set_reachable(False)
        assert presenter.load_state is LoadState.OFFLINE


class TestSearch:
    def test_query_filters_displayed_items(
        self, presenter, data_source, sample_categories, updates
    ) -> None:
        _loaded(presenter, data_source, sample_categories)
        presenter.on_query_changed("fic")
        assert [c.display_name for c in updates[-1].items] == ["Fiction", "Nonfiction"]
        assert presenter.item_count() == 2
        assert updates[-1].status_text == "2/3 categories matching 'fic'"

    def test_query_narrows_to_single_match(
        self, presenter, data_source, sample_categories
    ) -> None:
        _loaded(presenter, data_source, sample_categories)
        presenter.on_query_changed("Fict")
        assert [c.display_name for c in presenter.state.items] == ["Fiction", "Nonfiction"]
        presenter.on_query_changed("Sci")
        assert [c.display_name for c in presenter.state.items] == ["Science"]

    def test_empty_query_shows_full_collection(
        self, presenter, data_source, sample_categories
    ) -> None:
        _loaded(presenter, data_source, sample_categories)
        presenter.on_query_changed("sci")
        presenter.on_query_changed("")
        assert presenter.state.items == sample_categories

    def test_begin_search_with_empty_query_shows_all(
        self, presenter, data_source, sample_categories
    ) -> None:
        _loaded(presenter, data_source, sample_categories)
        presenter.begin_search()
        assert presenter.search_active is True
        assert presenter.item_count() == 3

    def test_dismiss_clears_query(self, presenter, data_source, sample_categories) -> None:
        _loaded(presenter, data_source, sample_categories)
        presenter.begin_search()
        presenter.on_query_changed("sci")
        presenter.dismiss_search()
        assert presenter.query == ""
        assert presenter.search_active is False
        assert presenter.state.items == sample_categories

    def test_filter_recomputed_when_collection_changes(
        self, presenter, data_source, sample_categories
    ) -> None:
        _loaded(presenter, data_source, sample_categories)
        presenter.on_query_changed("sci")
        assert presenter.item_count() == 1
        presenter.activate()
        data_source.succeed(make_categories("Science", "Social Science", "Manga"))
        assert [c.display_name for c in presenter.state.items] == ["Science", "Social Science"]

    def test_query_before_load_applies_to_loaded_data(
        self, presenter, data_source, sample_categories
    ) -> None:
        presenter.on_query_changed("non")
        presenter.activate()
        data_source.succeed(sample_categories)
        assert [c.display_name for c in presenter.state.items] == ["Nonfiction"]

    def test_none_query_treated_as_empty(self, presenter, data_source, sample_categories) -> None:
        _loaded(presenter, data_source, sample_categories)
        presenter.on_query_changed(None)
        assert presenter.query == ""
        assert presenter.item_count() == 3


class TestAccessors:
    def test_item_reads_displayed_set(self, presenter, data_source, sample_categories) -> None:
        _loaded(presenter, data_source, sample_categories)
        assert presenter.item(2).display_name == "Science"
        presenter.on_query_changed("sci")
        assert presenter.item(0).display_name == "Science"

    def test_item_out_of_range_raises(self, presenter, data_source) -> None:
        _loaded(presenter, data_source, make_categories("A", "B", "C", "D", "E"))
        with pytest.raises(IndexOutOfRangeError) as exc_info:
            presenter.selected(7)
        assert exc_info.value.index == 7
        assert exc_info.value.count == 5

    def test_out_of_range_is_an_index_error(self, presenter) -> None:
        with pytest.raises(IndexError):
            presenter.item(0)

    def test_negative_index_raises(self, presenter, data_source, sample_categories) -> None:
        _loaded(presenter, data_source, sample_categories)
        with pytest.raises(IndexOutOfRangeError):
            presenter.item(-1)

    def test_selected_resolves_against_filtered_set(
        self, presenter, data_source, sample_categories
    ) -> None:
        _loaded(presenter, data_source, sample_categories)
        presenter.on_query_changed("science")
        assert presenter.selected(0).display_name == "Science"

    def test_stale_index_after_filtering_raises(
        self, presenter, data_source, sample_categories
    ) -> None:
        _loaded(presenter, data_source, sample_categories)
        presenter.on_query_changed("fiction")
        with pytest.raises(IndexOutOfRangeError):
            presenter.selected(2)


class TestDispatch:
    def test_callbacks_go_through_dispatch(self, sample_categories) -> None:
        queued = []
        data_source = FakeDataSource()
        reachability = FakeReachability()
        presenter = CategoryListPresenter(data_source, reachability, dispatch=queued.append)

        presenter.activate()
        data_source.succeed(sample_categories)
        reachability.set_reachable(False)

        # Nothing applied until the owner drains its queue
        assert presenter.load_state is LoadState.LOADING
        assert len(queued) == 2

        for fn in queued:
            fn()
        assert presenter.categories == sample_categories
        assert presenter.load_state is LoadState.OFFLINE

    def test_direct_completion_call(self, presenter, sample_categories) -> None:
        presenter.activate()
        presenter.on_fetch_completed(CategoryFetchResult.success(sample_categories))
        assert presenter.load_state is LoadState.LOADED
