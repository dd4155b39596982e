import pytest

from packages.apm_tools.errors import InvalidArgument
from packages.apm_tools.search import SearchEngine, SearchMode, SearchOptions
from packages.apm_tools.store import Page, RecordStore


def _store(rows):
    store = RecordStore()
    store.load(rows)
    return store


def _codes(page: Page) -> list[str]:
    return [r.code for r in page.items]


def test_approximate_match_example(payroll_store: RecordStore) -> None:
    engine = SearchEngine(payroll_store)
    result = engine.search("payrol", 1, 10)
    assert result.total == 2
    assert _codes(result) == ["A1", "A2"]


def test_query_is_case_insensitive(payroll_store: RecordStore) -> None:
    engine = SearchEngine(payroll_store)
    assert engine.search("PAYROL", 1, 10) == engine.search("payrol", 1, 10)


@pytest.mark.parametrize("query", ["", "   ", "\t\n"])
def test_blank_query_equals_get_page(payroll_store: RecordStore, query: str) -> None:
    engine = SearchEngine(payroll_store)
    for page in (1, 2, 3):
        for size in (1, 2, 5):
            assert engine.search(query, page, size) == payroll_store.get_page(page, size)
    result = engine.search(query, 1, 2)
    assert _codes(result) == ["A1", "A2"]
    assert result.total == 3


def test_page_past_matches_is_empty_with_total(payroll_store: RecordStore) -> None:
    engine = SearchEngine(payroll_store)
    assert engine.search("payrol", 3, 1) == Page(items=(), total=2)
    assert engine.search("payrol", 2, 2) == Page(items=(), total=2)


def test_pagination_applies_to_ranked_matches(payroll_store: RecordStore) -> None:
    engine = SearchEngine(payroll_store)
    assert _codes(engine.search("payrol", 1, 1)) == ["A1"]
    assert _codes(engine.search("payrol", 2, 1)) == ["A2"]


def test_search_is_deterministic(sample_store: RecordStore) -> None:
    engine = SearchEngine(sample_store)
    first = engine.search("payroll", 1, 10)
    second = engine.search("payroll", 1, 10)
    fresh = SearchEngine(sample_store).search("payroll", 1, 10)
    assert first == second == fresh


def test_equal_scores_keep_collection_order() -> None:
    store = _store(
        [
            {"apm_application_code": "C2", "application_name": "Payroll"},
            {"apm_application_code": "C1", "application_name": "Payroll"},
        ]
    )
    hits = SearchEngine(store).rank("payroll")
    assert [h.record.code for h in hits] == ["C2", "C1"]
    assert hits[0].score == hits[1].score == 0.0


def test_closer_match_ranks_first() -> None:
    store = _store(
        [
            {"apm_application_code": "D1", "application_name": "Timesheet Trackr"},
            {"apm_application_code": "D2", "application_name": "Timesheet Tracker"},
        ]
    )
    hits = SearchEngine(store).rank("tracker")
    assert [h.record.code for h in hits] == ["D2", "D1"]
    assert hits[0].score < hits[1].score


def test_description_hits_rank_after_name_hits() -> None:
    store = _store(
        [
            {
                "apm_application_code": "E1",
                "application_name": "Ledger",
                "application_description": "nightly payroll export",
            },
            {"apm_application_code": "E2", "application_name": "Payroll Hub"},
        ]
    )
    hits = SearchEngine(store).rank("payroll")
    assert [(h.record.code, h.field) for h in hits] == [("E2", "name"), ("E1", "description")]


def test_code_is_searchable(sample_store: RecordStore) -> None:
    result = SearchEngine(sample_store).search("apm1004", 1, 10)
    assert _codes(result)[0] == "APM1004"


def test_contacts_are_not_searched(sample_store: RecordStore) -> None:
    for mode in SearchMode:
        engine = SearchEngine(sample_store, SearchOptions(mode=mode))
        assert engine.search("whitfield", 1, 10) == Page(items=(), total=0)


def test_unrelated_query_is_bounded(payroll_store: RecordStore) -> None:
    result = SearchEngine(payroll_store).search("payroll archive", 1, 10)
    assert _codes(result) == ["A2"]


def test_longer_query_is_compared_whole_against_short_names() -> None:
    store = _store(
        [
            {"apm_application_code": "O1", "application_name": "Ops"},
            {"apm_application_code": "O2", "application_name": "DevOps Pipeline"},
        ]
    )
    engine = SearchEngine(store)
    assert [h.record.code for h in engine.rank("devops pipeline")] == ["O2"]
    assert [h.record.code for h in engine.rank("ops")] == ["O1", "O2"]


def test_substring_mode(sample_store: RecordStore) -> None:
    engine = SearchEngine(sample_store, SearchOptions(mode="substring"))
    result = engine.search("payroll", 1, 10)
    assert _codes(result) == ["APM1001", "APM1003"]
    assert engine.search("payrol", 1, 10).total == 2
    assert engine.search("payrolx", 1, 10).total == 0


def test_substring_mode_matches_all_tokens(sample_store: RecordStore) -> None:
    engine = SearchEngine(sample_store, SearchOptions(mode=SearchMode.SUBSTRING))
    assert _codes(engine.search("badges reception", 1, 10)) == ["APM1004"]


def test_empty_collection_returns_nothing() -> None:
    engine = SearchEngine(RecordStore())
    assert engine.search("payroll", 1, 10) == Page(items=(), total=0)
    assert engine.search("", 1, 10) == Page(items=(), total=0)


@pytest.mark.parametrize("page,size", [(0, 10), (1, 0), (-2, 5)])
def test_invalid_paging_is_reported(payroll_store: RecordStore, page: int, size: int) -> None:
    engine = SearchEngine(payroll_store)
    with pytest.raises(InvalidArgument):
        engine.search("payrol", page, size)
    with pytest.raises(InvalidArgument):
        engine.search("no such thing at all", page, size)
    with pytest.raises(InvalidArgument):
        engine.search("", page, size)


def test_default_page_size_comes_from_options(sample_store: RecordStore) -> None:
    engine = SearchEngine(sample_store, SearchOptions(page_size=1))
    assert len(engine.search("").items) == 1
    assert engine.search("").total == 4


def test_reload_invalidates_ranking(payroll_store: RecordStore) -> None:
    engine = SearchEngine(payroll_store)
    assert engine.search("payrol", 1, 10).total == 2
    payroll_store.load([{"apm_application_code": "A9", "application_name": "Benefits Portal"}])
    assert engine.search("payrol", 1, 10).total == 0


def test_replacing_options_invalidates_ranking(payroll_store: RecordStore) -> None:
    engine = SearchEngine(payroll_store)
    assert engine.search("payrol", 1, 10).total == 2
    engine.options = SearchOptions(threshold=0.6)
    loose = engine.search("payrol", 1, 10)
    assert loose == SearchEngine(payroll_store, SearchOptions(threshold=0.6)).search("payrol", 1, 10)
    assert loose.total == 3


@pytest.mark.parametrize(
    "kwargs",
    [
        {"threshold": 1.5},
        {"threshold": -0.1},
        {"mode": "regex"},
        {"name_weight": 0.0},
        {"description_weight": 1.2},
        {"page_size": 0},
    ],
)
def test_invalid_options(kwargs) -> None:
    with pytest.raises(InvalidArgument):
        SearchOptions(**kwargs)


def test_options_from_settings_apply_overrides() -> None:
    from config import Settings

    options = SearchOptions.from_settings(Settings(), mode="substring", threshold=None)
    assert options.mode is SearchMode.SUBSTRING
    assert options.threshold == 0.3
    assert options.page_size == 20
