"""Data models for scrapers."""

from dataclasses import dataclass, field

from cinefeed.schemas.feed import Session


@dataclass
class RawListing:
    """
    One listing unit as found on a cinema website.

    A venue may list the same film several times for one day (one row per
    screening, one card per screen, ...). ``group_listings`` merges them into
    a single ``Session``.
    """

    title: str  # Film title as it appears on the cinema website
    times: list[str]  # Showtimes in whatever format the venue uses
    url: str | None = None  # Film or booking page
    is_double_feature: bool = False
    premium_times: list[str] = field(default_factory=list)  # e.g. IMAX premium slots


def group_listings(listings: list[RawListing], fallback_url: str) -> list[Session]:
    """
    Merge listings that share a title into one session per film.

    Times are concatenated in the order they were found. Duplicate times are
    kept, since a venue can run two screenings at the same time. The first
    deep link found for a title is used, else ``fallback_url``. Listings with
    no title or no times are skipped.

    Args:
        listings: Listings in document/API order
        fallback_url: Venue landing page

    Returns:
        Sessions in order of each title's first appearance
    """
    grouped: dict[str, RawListing] = {}

    for listing in listings:
        title = (listing.title or "").strip()
        times = [t for t in listing.times if t]
        if not title or not times:
            continue

        existing = grouped.get(title)
        if existing is None:
            grouped[title] = RawListing(
                title=title,
                times=list(times),
                url=listing.url,
                is_double_feature=listing.is_double_feature,
                premium_times=list(listing.premium_times),
            )
            continue

        existing.times.extend(times)
        existing.url = existing.url or listing.url
        existing.is_double_feature = existing.is_double_feature or listing.is_double_feature
        for premium in listing.premium_times:
            if premium not in existing.premium_times:
                existing.premium_times.append(premium)

    return [
        Session(
            title=listing.title,
            times=listing.times,
            url=listing.url or fallback_url,
            is_double_feature=listing.is_double_feature,
            premium_times=listing.premium_times or None,
        )
        for listing in grouped.values()
    ]
