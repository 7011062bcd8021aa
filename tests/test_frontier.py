# File: tests/test_frontier.py
from llms_scout.crawler.frontier import CrawlFrontier
from llms_scout.crawler.models import ScoredLink


def scored(url: str, score: int, source_depth: int = 0) -> ScoredLink:
    return ScoredLink(
        url=url,
        anchor_text="",
        is_nav_origin=False,
        source_depth=source_depth,
        priority_score=score,
    )


def make_frontier(**kwargs) -> CrawlFrontier:
    params = {"max_depth": 3, "max_pages": 100}
    params.update(kwargs)
    return CrawlFrontier(**params)


def test_score_only_increases_and_ranks():
    frontier = make_frontier()
    assert frontier.insert(scored("https://example.com/a", 10))
    assert frontier.insert(scored("https://example.com/b", 20))
    assert frontier.insert(scored("https://example.com/a", 25))
    assert not frontier.insert(scored("https://example.com/a", 5))

    assert frontier.best("https://example.com/a").priority_score == 25
    batch = frontier.next_batch(2)
    assert [link.url for link in batch] == ["https://example.com/a", "https://example.com/b"]
    assert len(frontier) == 0


def test_ties_keep_insertion_order():
    frontier = make_frontier()
    for name in ("x", "y", "z"):
        frontier.insert(scored(f"https://example.com/{name}", 7))
    assert [link.url[-1] for link in frontier.next_batch(3)] == ["x", "y", "z"]


def test_visited_urls_are_not_queued():
    frontier = make_frontier()
    frontier.mark_visited("https://example.com/a")
    assert not frontier.insert(scored("https://example.com/a", 99))
    assert "https://example.com/a" not in frontier


def test_mark_visited_removes_from_queue():
    frontier = make_frontier()
    frontier.insert(scored("https://example.com/a", 1))
    frontier.mark_visited("https://example.com/a")
    assert frontier.queued.isdisjoint(frontier.visited)
    assert frontier.next_batch(5) == []


def test_depth_limit_rejects_deep_links():
    frontier = make_frontier(max_depth=2)
    assert frontier.insert(scored("https://example.com/d2", 1, source_depth=1))
    assert not frontier.insert(scored("https://example.com/d3", 100, source_depth=2))
    assert "https://example.com/d3" not in frontier


def test_budget_stops_batches():
    frontier = make_frontier(max_pages=2)
    for i in range(5):
        frontier.insert(scored(f"https://example.com/{i}", i))
    assert len(frontier.next_batch(1)) == 1
    frontier.record_success()
    frontier.record_success()
    assert frontier.budget_remaining == 0
    assert frontier.next_batch(10) == []
    assert len(frontier) == 4


def test_capacity_evicts_lowest_score():
    frontier = make_frontier(capacity=2)
    frontier.insert(scored("https://example.com/low", 1))
    frontier.insert(scored("https://example.com/mid", 5))
    assert not frontier.insert(scored("https://example.com/lower", 0))
    assert frontier.insert(scored("https://example.com/high", 10))
    assert len(frontier) == 2
    assert "https://example.com/low" not in frontier
    assert [link.url for link in frontier.next_batch(5)] == [
        "https://example.com/high",
        "https://example.com/mid",
    ]


def test_raising_score_does_not_count_against_capacity():
    frontier = make_frontier(capacity=1)
    frontier.insert(scored("https://example.com/a", 1))
    assert frontier.insert(scored("https://example.com/a", 9))
    assert len(frontier) == 1


def test_retry_policy():
    link = scored("https://example.com/flaky", 3)
    no_retry = make_frontier()
    no_retry.mark_visited(link.url)
    assert not no_retry.retry(link)
    assert no_retry.is_visited(link.url)

    frontier = make_frontier(retry_failed=1)
    frontier.mark_visited(link.url)
    assert frontier.retry(link)
    assert link.url in frontier
    assert [l.url for l in frontier.next_batch(1)] == [link.url]
    frontier.mark_visited(link.url)
    assert not frontier.retry(link)
