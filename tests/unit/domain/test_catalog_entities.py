"""Tests for catalog domain entities."""

from __future__ import annotations

import dataclasses

import pytest

from moviescout.domain.entities.catalog import (
    CatalogRequest,
    Movie,
    SearchState,
    poster_url,
)


class TestMovie:
    def test_passes_raw_record_through(self) -> None:
        raw = {"id": 27205, "title": "Inception", "adult": False, "extra": [1, 2]}
        movie = Movie(raw=raw)

        assert movie.to_dict() == raw
        assert movie.id == "27205"
        assert movie.title == "Inception"

    def test_title_falls_back_to_original_title(self) -> None:
        movie = Movie(raw={"id": 1, "original_title": "Le Samouraï"})
        assert movie.title == "Le Samouraï"

    def test_poster_url_uses_w500(self) -> None:
        movie = Movie(raw={"id": 1, "poster_path": "/abc.jpg"})
        assert movie.poster_url == "https://image.tmdb.org/t/p/w500/abc.jpg"

    def test_missing_poster_gives_empty_url(self) -> None:
        assert Movie(raw={"id": 1}).poster_url == ""
        assert poster_url(None) == ""


class TestCatalogRequest:
    def test_url_encodes_params_in_order(self) -> None:
        req = CatalogRequest(
            path="/discover/movie",
            params=(("sort_by", "popularity.desc"), ("with_keywords", "star wars")),
        )
        assert (
            req.url("https://api.themoviedb.org/3")
            == "https://api.themoviedb.org/3/discover/movie"
            "?sort_by=popularity.desc&with_keywords=star+wars"
        )

    def test_url_without_params(self) -> None:
        req = CatalogRequest(path="/genre/movie/list")
        assert req.url("https://x") == "https://x/genre/movie/list"

    def test_equal_inputs_are_equal_requests(self) -> None:
        a = CatalogRequest(path="/p", params=(("page", "1"),))
        b = CatalogRequest(path="/p", params=(("page", "1"),))
        assert a == b
        assert hash(a) == hash(b)


class TestSearchState:
    def test_defaults(self) -> None:
        state = SearchState()
        assert state.page == 1
        assert state.total_pages == 1
        assert state.selected_genre_id is None
        assert state.results == ()
        assert not state.is_loading
        assert state.error_message is None

    def test_is_immutable(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            SearchState().page = 2  # type: ignore[misc]

    @pytest.mark.parametrize(
        ("page", "total", "prev", "nxt"),
        [(1, 1, False, False), (1, 5, False, True), (3, 5, True, True), (5, 5, True, False)],
    )
    def test_pagination_bounds(self, page: int, total: int, prev: bool, nxt: bool) -> None:
        state = SearchState(page=page, total_pages=total)
        assert state.can_go_prev is prev
        assert state.can_go_next is nxt
