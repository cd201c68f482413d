from __future__ import annotations

from typing import Mapping, Optional

# Largest first; Strava keys photo URLs by their long edge in pixels.
PHOTO_SIZE_PREFERENCE = ("2048", "1200", "1000")


def _largest_sized_url(urls: Mapping[str, Optional[str]]) -> Optional[str]:
    sized = [(int(size), url) for size, url in urls.items() if size.isdigit() and url]
    if not sized:
        return None
    return max(sized)[1]


def select_best_photo_url(
    urls: Mapping[str, Optional[str]],
    fallback: Optional[str] = None,
    *,
    any_size: bool = False,
) -> Optional[str]:
    """Return the highest-resolution URL available, else ``fallback``.

    With ``any_size`` the largest numeric key is accepted last, for the
    activity cover photo which Strava only serves at small sizes such as
    ``"100"`` and ``"600"``.
    """

    for size in PHOTO_SIZE_PREFERENCE:
        url = urls.get(size)
        if url:
            return url
    if fallback:
        return fallback
    if any_size:
        return _largest_sized_url(urls)
    return None


__all__ = ["PHOTO_SIZE_PREFERENCE", "select_best_photo_url"]
