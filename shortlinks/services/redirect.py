"""Redirect resolution

Resolves a visited shortcode against the current contents of the record store:

    shortcode ──► find() ──► None ───────────────► NOT_FOUND   (no click)
                     │
                     └──► record ──► expired ────► EXPIRED     (no click)
                                 │
                                 └──► active ────► ACTIVE      (one click appended, redirect target)

The record is always read fresh from the store, and the outcome is decided
before any click is written, so clicks exist only for ACTIVE resolutions.

Example:
    >>> resolver = RedirectResolver(records=records, clicks=clicks)
    >>> result = resolver.resolve('abc123', referrer='https://news.example.org')
    >>> result.status
    <RedirectStatus.ACTIVE: 'active'>
    >>> result.target_url
    'https://example.com/article/123'
"""

import logging
from dataclasses import dataclass
from enum import StrEnum

from shortlinks.types import Clock
from shortlinks.constants import DIRECT_REFERRER
from shortlinks.models import UrlRecordModel, ClickEventModel
from shortlinks.dao.base import UrlRecordBaseDAO, ClickEventBaseDAO
from shortlinks.dao.exceptions import DataStoreError
from shortlinks.services.lifecycle import is_expired
from shortlinks.services.location import LocationProvider, MockLocationProvider
from shortlinks.utils.clock import utc_now, to_iso
from shortlinks.utils.logging import EventLogger


# Event names
REDIRECT_ATTEMPT = 'REDIRECT_ATTEMPT'
REDIRECT_NOT_FOUND = 'REDIRECT_NOT_FOUND'
REDIRECT_EXPIRED = 'REDIRECT_EXPIRED'
CLICK_RECORDED = 'CLICK_RECORDED'
CLICK_RECORD_FAILED = 'CLICK_RECORD_FAILED'


class RedirectStatus(StrEnum):
    NOT_FOUND = 'not_found'
    EXPIRED = 'expired'
    ACTIVE = 'active'


# User-facing copy, one message per terminal status
REDIRECT_MESSAGES = {
    RedirectStatus.NOT_FOUND: 'Short URL not found',
    RedirectStatus.EXPIRED: 'This short URL has expired',
    RedirectStatus.ACTIVE: 'Redirecting',
}


@dataclass(frozen=True)
class RedirectResult:
    status: RedirectStatus
    shortcode: str
    record: UrlRecordModel | None = None
    click: ClickEventModel | None = None

    @property
    def target_url(self) -> str | None:
        if self.status is RedirectStatus.ACTIVE and self.record is not None:
            return self.record.long_url
        return None

    @property
    def message(self) -> str:
        return REDIRECT_MESSAGES[self.status]


class RedirectResolver:
    """Classify a shortcode visit and record the click of active links.

    Attributes:
        records (UrlRecordBaseDAO):
            Record store, read on every resolution.
        clicks (ClickEventBaseDAO):
            Click store, written only for active links.
        clock (Clock):
            Source of the visit time.
        locator (LocationProvider):
            Best-effort location of the visitor.
        events (EventLogger):
            Structured event logger.
    """

    def __init__(
        self,
        records: UrlRecordBaseDAO,
        clicks: ClickEventBaseDAO,
        clock: Clock = utc_now,
        locator: LocationProvider | None = None,
        events: EventLogger | None = None,
    ):
        self.records = records
        self.clicks = clicks
        self.clock = clock
        self.locator = locator if locator is not None else MockLocationProvider()
        self.events = events if events is not None else EventLogger(logging.getLogger(__name__))

    def resolve(self, shortcode: str, referrer: str | None = None, client_ip: str | None = None) -> RedirectResult:
        """Resolve a shortcode visit.

        Args:
            shortcode (str):
                Visited shortcode.
            referrer (str | None):
                Referer of the visit; 'Direct' when missing.
            client_ip (str | None):
                Visitor IP, only used for the best-effort location.

        Returns:
            RedirectResult: NOT_FOUND, EXPIRED, or ACTIVE with the redirect target.

        Raises:
            DataStoreError:
                If the record lookup fails. A failure to store the click is
                logged and does not affect an ACTIVE result.
        """
        self.events.log(REDIRECT_ATTEMPT, shortcode=shortcode)

        record = self.records.find(shortcode)
        if record is None:
            self.events.log(REDIRECT_NOT_FOUND, shortcode=shortcode)
            return RedirectResult(status=RedirectStatus.NOT_FOUND, shortcode=shortcode)

        now = self.clock()
        if is_expired(record, now):
            self.events.log(REDIRECT_EXPIRED, shortcode=shortcode, expiryTime=to_iso(record.expiry_time))
            return RedirectResult(status=RedirectStatus.EXPIRED, shortcode=shortcode, record=record)

        click = ClickEventModel(
            shortcode=shortcode,
            timestamp=now,
            referrer=referrer or DIRECT_REFERRER,
            location=self.locator.locate(client_ip),
        )
        try:
            self.clicks.append(click)
        except DataStoreError as e:
            self.events.warning(CLICK_RECORD_FAILED, shortcode=shortcode, reason=str(e))
        else:
            self.events.log(CLICK_RECORDED, **click.to_dict())

        return RedirectResult(status=RedirectStatus.ACTIVE, shortcode=shortcode, record=record, click=click)
