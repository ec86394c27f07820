"""Tests for the TMDb API client."""

from unittest.mock import AsyncMock, MagicMock, patch

from cinefeed.services.tmdb_client import TMDbClient


# ---------------------------------------------------------------------------
# Sample fixture data
# ---------------------------------------------------------------------------

SAMPLE_SEARCH_RESPONSE = {
    "results": [
        {
            "id": 578,
            "title": "Jaws",
            "release_date": "1975-06-20",
            "overview": "A great white shark terrorises Amity Island.",
            "poster_path": "/jaws.jpg",
            "vote_average": 7.7,
        },
        {
            "id": 99999,
            "title": "Jaws 19",
            "release_date": "2015-10-21",
        },
    ]
}

SAMPLE_DETAILS_RESPONSE = {
    "id": 578,
    "title": "Jaws",
    "runtime": 124,
    "videos": {
        "results": [
            {"site": "Vimeo", "type": "Trailer", "key": "vimeo-key"},
            {"site": "YouTube", "type": "Featurette", "key": "featurette-key"},
            {"site": "YouTube", "type": "Trailer", "key": "U1fu_sA7XhE"},
            {"site": "YouTube", "type": "Teaser", "key": "teaser-key"},
        ]
    },
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def make_http_response(json_data: dict, status_code: int = 200) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = json_data
    if status_code >= 400:
        response.raise_for_status.side_effect = Exception(f"HTTP {status_code}")
    else:
        response.raise_for_status = MagicMock()
    return response


def make_async_client_ctx(response: MagicMock) -> AsyncMock:
    """Return an async context manager whose .get() always returns *response*."""
    inner = AsyncMock()
    inner.get = AsyncMock(return_value=response)
    ctx = AsyncMock()
    ctx.__aenter__ = AsyncMock(return_value=inner)
    ctx.__aexit__ = AsyncMock(return_value=False)
    return ctx


def make_failing_client_ctx(error: Exception) -> AsyncMock:
    inner = AsyncMock()
    inner.get = AsyncMock(side_effect=error)
    ctx = AsyncMock()
    ctx.__aenter__ = AsyncMock(return_value=inner)
    ctx.__aexit__ = AsyncMock(return_value=False)
    return ctx


# ---------------------------------------------------------------------------
# search_film
# ---------------------------------------------------------------------------


class TestSearchFilm:
    async def test_returns_none_without_api_key(self) -> None:
        client = TMDbClient(api_key="dummy")
        client.api_key = None  # type: ignore[assignment]
        result = await client.search_film("Jaws")
        assert result is None

    async def test_returns_first_result_unconditionally(self) -> None:
        client = TMDbClient(api_key="test-key")
        ctx = make_async_client_ctx(make_http_response(SAMPLE_SEARCH_RESPONSE))
        with patch("httpx.AsyncClient", return_value=ctx):
            result = await client.search_film("Jaws")
        assert result is not None
        assert result["id"] == 578

    async def test_sends_query_and_language(self) -> None:
        client = TMDbClient(api_key="test-key", language="en-AU")
        ctx = make_async_client_ctx(make_http_response(SAMPLE_SEARCH_RESPONSE))
        with patch("httpx.AsyncClient", return_value=ctx):
            await client.search_film("Jaws")
        get = ctx.__aenter__.return_value.get
        assert get.call_args.args[0].endswith("/search/movie")
        params = get.call_args.kwargs["params"]
        assert params["query"] == "Jaws"
        assert params["language"] == "en-AU"
        assert params["api_key"] == "test-key"

    async def test_returns_none_when_results_empty(self) -> None:
        client = TMDbClient(api_key="test-key")
        ctx = make_async_client_ctx(make_http_response({"results": []}))
        with patch("httpx.AsyncClient", return_value=ctx):
            result = await client.search_film("UnknownFilm")
        assert result is None

    async def test_returns_none_when_results_key_missing(self) -> None:
        client = TMDbClient(api_key="test-key")
        ctx = make_async_client_ctx(make_http_response({"status_message": "oops"}))
        with patch("httpx.AsyncClient", return_value=ctx):
            result = await client.search_film("Jaws")
        assert result is None

    async def test_returns_none_on_http_error(self) -> None:
        client = TMDbClient(api_key="test-key")
        ctx = make_async_client_ctx(make_http_response({}, status_code=500))
        with patch("httpx.AsyncClient", return_value=ctx):
            result = await client.search_film("Jaws")
        assert result is None

    async def test_returns_none_on_network_error(self) -> None:
        client = TMDbClient(api_key="test-key")
        ctx = make_failing_client_ctx(Exception("Connection refused"))
        with patch("httpx.AsyncClient", return_value=ctx):
            result = await client.search_film("Jaws")
        assert result is None


# ---------------------------------------------------------------------------
# get_film_details
# ---------------------------------------------------------------------------


class TestGetFilmDetails:
    async def test_returns_none_without_api_key(self) -> None:
        client = TMDbClient(api_key="dummy")
        client.api_key = None  # type: ignore[assignment]
        result = await client.get_film_details(578)
        assert result is None

    async def test_returns_film_details_on_success(self) -> None:
        client = TMDbClient(api_key="test-key")
        ctx = make_async_client_ctx(make_http_response(SAMPLE_DETAILS_RESPONSE))
        with patch("httpx.AsyncClient", return_value=ctx):
            result = await client.get_film_details(578)
        assert result is not None
        assert result["runtime"] == 124

    async def test_appends_videos_to_request(self) -> None:
        client = TMDbClient(api_key="test-key")
        ctx = make_async_client_ctx(make_http_response(SAMPLE_DETAILS_RESPONSE))
        with patch("httpx.AsyncClient", return_value=ctx):
            await client.get_film_details(578)
        params = ctx.__aenter__.return_value.get.call_args.kwargs["params"]
        assert params["append_to_response"] == "videos"

    async def test_calls_correct_endpoint(self) -> None:
        client = TMDbClient(api_key="test-key")
        ctx = make_async_client_ctx(make_http_response(SAMPLE_DETAILS_RESPONSE))
        with patch("httpx.AsyncClient", return_value=ctx):
            await client.get_film_details(99)
        url = ctx.__aenter__.return_value.get.call_args.args[0]
        assert url.endswith("/movie/99")

    async def test_returns_none_on_http_error(self) -> None:
        client = TMDbClient(api_key="test-key")
        ctx = make_async_client_ctx(make_http_response({}, status_code=404))
        with patch("httpx.AsyncClient", return_value=ctx):
            result = await client.get_film_details(99999)
        assert result is None

    async def test_returns_none_on_network_error(self) -> None:
        client = TMDbClient(api_key="test-key")
        ctx = make_failing_client_ctx(Exception("Timeout"))
        with patch("httpx.AsyncClient", return_value=ctx):
            result = await client.get_film_details(578)
        assert result is None


# ---------------------------------------------------------------------------
# extract_trailer_url / poster_url
# ---------------------------------------------------------------------------


class TestExtractTrailerUrl:
    def test_picks_first_youtube_trailer_or_teaser(self) -> None:
        client = TMDbClient(api_key="key")
        url = client.extract_trailer_url(SAMPLE_DETAILS_RESPONSE)
        assert url == "https://www.youtube.com/watch?v=U1fu_sA7XhE"

    def test_accepts_teaser(self) -> None:
        client = TMDbClient(api_key="key")
        details = {"videos": {"results": [{"site": "YouTube", "type": "Teaser", "key": "abc"}]}}
        assert client.extract_trailer_url(details) == "https://www.youtube.com/watch?v=abc"

    def test_returns_none_without_youtube_trailer(self) -> None:
        client = TMDbClient(api_key="key")
        details = {"videos": {"results": [{"site": "Vimeo", "type": "Trailer", "key": "x"}]}}
        assert client.extract_trailer_url(details) is None

    def test_returns_none_when_videos_missing(self) -> None:
        client = TMDbClient(api_key="key")
        assert client.extract_trailer_url({"runtime": 100}) is None


class TestPosterUrl:
    def test_builds_w300_url(self) -> None:
        client = TMDbClient(api_key="key")
        assert client.poster_url("/jaws.jpg") == "https://image.tmdb.org/t/p/w300/jaws.jpg"

    def test_returns_none_for_missing_path(self) -> None:
        client = TMDbClient(api_key="key")
        assert client.poster_url(None) is None
        assert client.poster_url("") is None
