"""View-model builders for the discover API.

Each function turns read-only domain data into the JSON shape a browser
front end renders directly, including the degraded states.
"""

from __future__ import annotations

from typing import Any, Iterable

from moviescout.domain.entities.catalog import Genre, SearchState, TrendingEntry

ALL_GENRES_LABEL = "All Genres"
GENRES_FALLBACK_MESSAGE = "Loading genres or failed to fetch."
NO_RESULTS_MESSAGE = "No search results found"
TRENDING_TITLE = "Trending Movies"


def present_genre_filter(
    genres: Iterable[Genre], selected_genre_id: str | None = None
) -> dict[str, Any]:
    """Select control with an "All Genres" default, or a fallback message."""
    options = [{"value": g.id, "label": g.name} for g in genres]
    if not options:
        return {
            "visible": False,
            "options": [],
            "selected": "",
            "fallback_message": GENRES_FALLBACK_MESSAGE,
        }
    return {
        "visible": True,
        "options": [{"value": "", "label": ALL_GENRES_LABEL}, *options],
        "selected": selected_genre_id or "",
        "fallback_message": None,
    }


def present_trending(entries: Iterable[TrendingEntry]) -> dict[str, Any]:
    """Ranked trending list; hidden entirely when empty."""
    items = [
        {
            "rank": rank,
            "id": entry.id,
            "term": entry.term,
            "count": entry.count,
            "movie_id": entry.movie_id,
            "title": entry.title,
            "poster_url": entry.poster_url,
        }
        for rank, entry in enumerate(entries, start=1)
    ]
    return {"visible": bool(items), "title": TRENDING_TITLE, "items": items}


def present_pagination(state: SearchState) -> dict[str, Any] | None:
    if state.total_pages <= 1:
        return None
    return {
        "page": state.page,
        "total_pages": state.total_pages,
        "label": f"Page {state.page} of {state.total_pages}",
        "prev_disabled": not state.can_go_prev,
        "next_disabled": not state.can_go_next,
    }


def present_search(session_id: str, state: SearchState) -> dict[str, Any]:
    """Search section view.

    Status precedence: loading, then error, then "no results" (only when a
    term is active), then results with optional pagination.
    """
    view: dict[str, Any] = {
        "session_id": session_id,
        "term": state.raw_term,
        "debounced_term": state.debounced_term,
        "genre_id": state.selected_genre_id or "",
        "movies": [],
        "message": None,
        "pagination": None,
    }

    if state.is_loading:
        view["status"] = "loading"
    elif state.error_message:
        view["status"] = "error"
        view["message"] = state.error_message
    elif not state.results and state.debounced_term:
        view["status"] = "empty"
        view["message"] = NO_RESULTS_MESSAGE
    else:
        view["status"] = "results"
        view["movies"] = [m.to_dict() for m in state.results]
        view["pagination"] = present_pagination(state)
    return view
