import pytest
from bs4 import BeautifulSoup
from unittest.mock import AsyncMock, MagicMock

from tiktok_scraper.exceptions import ExtractionError, LoadError
from tiktok_scraper.strategy import FetchStrategy, FetchStrategySelector

pytestmark = pytest.mark.unit

URL = "https://www.tiktok.com/@dancer/video/7100000000000000001"


def _selector(direct_html=None, rendered_html=None):
    fetcher = MagicMock()
    fetcher.request_website = AsyncMock(return_value=BeautifulSoup(direct_html or "", "html.parser"))
    renderer = MagicMock()
    renderer.render = AsyncMock(return_value=rendered_html)
    return FetchStrategySelector(fetcher, renderer), fetcher, renderer


class TestFetchStrategySelector:
    """Direct fetch first, headless render as fallback."""

    @pytest.mark.asyncio
    async def test_direct_fetch_wins_when_state_present(self, universal_html, video_detail_state):
        """Test the browser is never launched when the direct page has the state."""
        selector, fetcher, renderer = _selector(direct_html=universal_html(video_detail_state))

        result = await selector.resolve(URL)

        assert result.strategy is FetchStrategy.DIRECT
        assert result.state == video_detail_state
        fetcher.request_website.assert_awaited_once_with(URL)
        renderer.render.assert_not_called()

    @pytest.mark.asyncio
    async def test_falls_back_to_renderer_when_tag_missing(self, universal_html, video_detail_state):
        """Test a page without the script tag triggers a headless render."""
        selector, _, renderer = _selector(
            direct_html="<html><body>Please wait...</body></html>",
            rendered_html=universal_html(video_detail_state),
        )

        result = await selector.resolve(URL)

        assert result.strategy is FetchStrategy.RENDERED
        assert result.state == video_detail_state
        renderer.render.assert_awaited_once_with(URL)

    @pytest.mark.asyncio
    async def test_falls_back_to_renderer_when_json_invalid(self, universal_html, video_detail_state):
        """Test malformed embedded JSON triggers a headless render."""
        selector, _, renderer = _selector(
            direct_html=universal_html("{broken"),
            rendered_html=universal_html(video_detail_state),
        )

        result = await selector.resolve(URL)

        assert result.strategy is FetchStrategy.RENDERED
        renderer.render.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_empty_object_state_is_accepted(self, universal_html):
        """Test an empty object is still a parsed state."""
        selector, _, renderer = _selector(direct_html=universal_html({}))

        result = await selector.resolve(URL)

        assert result.strategy is FetchStrategy.DIRECT
        assert result.state == {}
        renderer.render.assert_not_called()

    @pytest.mark.asyncio
    async def test_forced_rendered_skips_direct_fetch(self, universal_html, video_detail_state):
        """Test force=RENDERED goes straight to the browser."""
        selector, fetcher, _ = _selector(rendered_html=universal_html(video_detail_state))

        result = await selector.resolve(URL, force=FetchStrategy.RENDERED)

        assert result.strategy is FetchStrategy.RENDERED
        fetcher.request_website.assert_not_called()

    @pytest.mark.asyncio
    async def test_forced_direct_does_not_fall_back(self):
        """Test force=DIRECT raises instead of rendering."""
        selector, _, renderer = _selector(direct_html="<html></html>")

        with pytest.raises(ExtractionError):
            await selector.resolve(URL, force=FetchStrategy.DIRECT)

        renderer.render.assert_not_called()

    @pytest.mark.asyncio
    async def test_rendered_page_without_state_raises(self):
        """Test a rendered page still missing the state raises ExtractionError."""
        selector, _, _ = _selector(direct_html="<html></html>", rendered_html="<html></html>")

        with pytest.raises(ExtractionError):
            await selector.resolve(URL)

    @pytest.mark.asyncio
    async def test_renderer_load_error_propagates(self):
        """Test navigation failures surface to the caller."""
        selector, _, renderer = _selector(direct_html="<html></html>")
        renderer.render.side_effect = LoadError("Could not load the desired Page!", url=URL)

        with pytest.raises(LoadError, match="Could not load the desired Page!"):
            await selector.resolve(URL)

    @pytest.mark.asyncio
    async def test_load_state_returns_state_only(self, universal_html, user_detail_state):
        selector, _, _ = _selector(direct_html=universal_html(user_detail_state))

        assert await selector.load_state(URL) == user_detail_state
