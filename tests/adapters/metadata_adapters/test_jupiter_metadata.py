import pytest

from sol_holdings.adapters.metadata_adapters.jupiter import JupiterMetadataAdapter
from sol_holdings.clients.http import UpstreamError


@pytest.mark.asyncio
async def test_fetch_metadata_reads_search_results(settings, fake_http, providers_for):
    def handler(url, params, **_):
        assert url == settings.jupiter_search_url
        assert params == {"query": "MintA,MintB"}
        return [
            {"id": "MintA", "symbol": "AAA", "decimals": 9},
            {"id": "MintB", "symbol": "", "decimals": True},
            {"id": "Unrequested", "symbol": "ZZZ", "decimals": 6},
        ]

    adapter = JupiterMetadataAdapter(settings, providers_for(settings, fake_http(handler)))

    result = await adapter.fetch_metadata(["MintA", "MintB"])

    assert result["MintA"].symbol == "AAA"
    assert result["MintA"].decimals == 9
    assert result["MintB"].symbol is None
    assert result["MintB"].decimals is None
    assert "Unrequested" not in result


@pytest.mark.asyncio
async def test_batches_are_capped_and_isolated(fake_http, providers_for):
    from sol_holdings.settings import HoldingsSettings

    settings = HoldingsSettings(_env_file=None, metadata_batch_size=2)

    def handler(url, params, **_):
        batch = params["query"].split(",")
        if "MintC" in batch:
            return UpstreamError(url, 400, "bad request")
        return [{"id": m, "symbol": m[-1], "decimals": 6} for m in batch]

    http = fake_http(handler)
    adapter = JupiterMetadataAdapter(settings, providers_for(settings, http))

    result = await adapter.fetch_metadata(["MintA", "MintB", "MintC"])

    assert set(result) == {"MintA", "MintB"}
    assert len(http.calls) == 2
    assert len(adapter.failures) == 1
