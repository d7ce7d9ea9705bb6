"""Simple link statistics

Counts records and clicks; no aggregation beyond counting.

Example:
    >>> stats = collect_statistics(records, clicks, utc_now())
    >>> stats.total_urls, stats.total_clicks, stats.active_urls
    (3, 7, 2)
    >>> stats.most_clicked
    ('abc123', 5)
"""

from dataclasses import dataclass, field
from datetime import datetime

from shortlinks.models import UrlRecordModel, ClickEventModel
from shortlinks.dao.base import UrlRecordBaseDAO, ClickEventBaseDAO
from shortlinks.services.lifecycle import is_expired


@dataclass(frozen=True)
class LinkPerformance:
    record: UrlRecordModel
    is_expired: bool
    clicks: list[ClickEventModel] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            **self.record.to_dict(),
            'isExpired': self.is_expired,
            'clickCount': len(self.clicks),
            'clicks': [click.to_dict() for click in self.clicks],
        }


@dataclass(frozen=True)
class LinkStatistics:
    total_urls: int
    total_clicks: int
    active_urls: int
    most_clicked: tuple[str, int] | None
    links: list[LinkPerformance] = field(default_factory=list)

    def to_dict(self) -> dict:
        most_clicked = None
        if self.most_clicked is not None:
            shortcode, clicks = self.most_clicked
            most_clicked = {'shortcode': shortcode, 'clicks': clicks}

        return {
            'totalUrls': self.total_urls,
            'totalClicks': self.total_clicks,
            'activeUrls': self.active_urls,
            'mostClicked': most_clicked,
            'links': [link.to_dict() for link in self.links],
        }


def collect_statistics(records: UrlRecordBaseDAO, clicks: ClickEventBaseDAO, now: datetime) -> LinkStatistics:
    """Collect statistics over every retained record and click.

    Args:
        records (UrlRecordBaseDAO): record store
        clicks (ClickEventBaseDAO): click store
        now (datetime): instant used to decide which links are still active

    Returns:
        LinkStatistics: totals and per-link performance, records in creation order.

    Raises:
        DataStoreError: If either store fails.
    """
    all_records = records.get_all()
    all_clicks = clicks.list_all()

    clicks_by_shortcode: dict[str, list[ClickEventModel]] = {}
    for click in all_clicks:
        clicks_by_shortcode.setdefault(click.shortcode, []).append(click)

    links = [
        LinkPerformance(
            record=record,
            is_expired=is_expired(record, now),
            clicks=clicks_by_shortcode.get(record.shortcode, []),
        )
        for record in all_records
    ]

    return LinkStatistics(
        total_urls=len(all_records),
        total_clicks=len(all_clicks),
        active_urls=sum(1 for link in links if not link.is_expired),
        most_clicked=_most_clicked(links),
        links=links,
    )


def _most_clicked(links: list[LinkPerformance]) -> tuple[str, int] | None:
    # Ties go to the earliest created record; links are already in creation order
    best = None
    for link in links:
        if link.clicks and (best is None or len(link.clicks) > best[1]):
            best = (link.record.shortcode, len(link.clicks))
    return best
