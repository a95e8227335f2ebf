from datetime import date

import httpx
import pytest

from hukamnama_service import HukamnamaService, HukamnamaUnavailable


@pytest.mark.asyncio
async def test_daily_reading_is_formatted(hukamnama, sikhnet):
    result = await hukamnama.get_daily(date(2025, 3, 3))
    body = result.hukamnama

    assert sikhnet.paths == ["/v1/hukamnama/today"]
    assert result.date == "March 3, 2025"
    assert body.gurmukhi.startswith("ਸੋਰਠਿ")
    assert body.transliteration.startswith("Sorath, Fifth Mehl")
    assert body.translation.startswith("Sorat'h")
    assert body.page_number == "622"
    assert body.raag == "Sorath"
    assert body.audio_links.english == "https://audio.test/e.mp3"
    assert "Sri Harmandir Sahib" in body.explanation
    assert len(body.actions) == 3


@pytest.mark.asyncio
async def test_daily_reading_is_cached_per_day(hukamnama, sikhnet):
    first = await hukamnama.get_daily(date(2025, 3, 3))
    second = await hukamnama.get_daily(date(2025, 3, 3))
    assert first == second
    assert len(sikhnet.paths) == 1

    await hukamnama.get_daily(date(2025, 3, 4))
    assert len(sikhnet.paths) == 2


@pytest.mark.asyncio
async def test_fetch_failure_serves_fallback_without_caching(hukamnama, sikhnet):
    sikhnet.status_code = 503
    result = await hukamnama.get_daily(date(2025, 3, 3))
    assert result.hukamnama.page_number == "696"
    assert result.hukamnama.raag == "Jaitsree"
    assert result.date == "March 3, 2025"
    assert "fallback" in result.hukamnama.explanation

    sikhnet.status_code = 200
    result = await hukamnama.get_daily(date(2025, 3, 3))
    assert result.hukamnama.page_number == "622"
    assert len(sikhnet.paths) == 2


@pytest.mark.asyncio
async def test_payload_without_gurmukhi_is_a_failure(hukamnama, sikhnet):
    sikhnet.payload = {"date": "today"}
    result = await hukamnama.get_daily(date(2025, 3, 3))
    assert result.hukamnama.page_number == "696"


@pytest.mark.asyncio
async def test_archive_path_and_label(hukamnama, sikhnet):
    sikhnet.payload.pop("date")
    result = await hukamnama.get_by_date(2024, 1, 5)
    assert sikhnet.paths == ["/v1/hukamnama/2024/01/05"]
    assert result.date == "January 5, 2024"
    assert result.hukamnama.explanation == "This is the Hukamnama from January 5, 2024."


@pytest.mark.asyncio
async def test_archive_invalid_date(hukamnama, sikhnet):
    with pytest.raises(ValueError):
        await hukamnama.get_by_date(2024, 2, 30)
    assert sikhnet.paths == []


@pytest.mark.asyncio
async def test_archive_fetch_failure_raises():
    def boom(request):
        raise httpx.ConnectError("no route to host")

    service = HukamnamaService(base_url="https://hukamnama.test", transport=httpx.MockTransport(boom))
    with pytest.raises(HukamnamaUnavailable):
        await service.get_by_date(2024, 1, 5)
