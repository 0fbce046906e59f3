"""Tests for the CNAE search service and its cache."""

import pytest

from pj_regime_analyzer.core.models.enums import AnexoSimples
from pj_regime_analyzer.core.services.cnae_search import CnaeSearchService
from pj_regime_analyzer.shared.exceptions import NotFoundError, ValidationError


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self):
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def service(referencia, clock) -> CnaeSearchService:
    return CnaeSearchService(referencia, ttl=60.0, clock=clock)


class TestSearch:
    """Tests for paginated search."""

    def test_pagination(self, service, referencia):
        """Test pages partition the result set."""
        total = len(referencia.classificacoes)
        primeira = service.search("", page=1, limit=10)
        segunda = service.search("", page=2, limit=10)

        assert primeira.total == total
        assert primeira.total_pages == -(-total // 10)
        assert len(primeira.items) == 10
        assert {c.codigo for c in primeira.items}.isdisjoint(c.codigo for c in segunda.items)

    def test_page_past_end_is_empty(self, service):
        """Test pages beyond the last one return no items."""
        pagina = service.search("", page=999, limit=10)
        assert pagina.items == []
        assert pagina.total > 0

    def test_no_results(self, service):
        pagina = service.search("xyzxyz")
        assert pagina.total == 0
        assert pagina.total_pages == 0

    def test_search_by_description(self, service):
        """Test description search."""
        codigos = {c.codigo for c in service.search("advocatícios").items}
        assert codigos == {"6911701"}

    @pytest.mark.parametrize("page,limit", [(0, 10), (1, 0), (1, 101)])
    def test_invalid_pagination(self, service, page, limit):
        """Test page/limit bounds."""
        with pytest.raises(ValidationError):
            service.search("", page=page, limit=limit)


class TestCache:
    """Tests for the TTL cache."""

    def test_second_call_is_a_hit(self, service):
        """Test repeated searches are served from cache."""
        primeira = service.search("comércio")
        segunda = service.search("comércio")

        assert segunda is primeira
        stats = service.cache_stats()
        assert stats["hits"] == 1
        assert stats["misses"] == 1
        assert stats["size"] == 1

    def test_key_normalized(self, service):
        """Test case and surrounding spaces share one cache entry."""
        service.search("Comércio")
        service.search("  comércio ")
        assert service.cache_stats()["hits"] == 1

    def test_different_page_is_a_miss(self, service):
        service.search("comércio", page=1, limit=5)
        service.search("comércio", page=2, limit=5)
        assert service.cache_stats()["misses"] == 2

    def test_expiry(self, service, clock):
        """Test entries expire after the TTL."""
        primeira = service.search("comércio")
        clock.now += 61
        segunda = service.search("comércio")

        assert segunda is not primeira
        assert segunda == primeira
        assert service.cache_stats()["misses"] == 2

    def test_not_expired_before_ttl(self, service, clock):
        service.search("comércio")
        clock.now += 59
        service.search("comércio")
        assert service.cache_stats()["hits"] == 1

    def test_expired_entries_are_dropped(self, service, clock):
        """Test distinct searches do not accumulate once expired."""
        for i in range(500):
            service.search(f"termo-{i}")
            clock.now += 10

        # Entries live 60s, so at most the last six pages remain
        assert service.cache_stats()["size"] <= 7
        assert service.cache_stats()["misses"] == 500

    def test_clear_cache(self, service):
        """Test clearing drops every entry."""
        service.search("comércio")
        service.search("serviços")
        service.clear_cache()

        assert service.cache_stats()["size"] == 0
        service.search("comércio")
        assert service.cache_stats()["misses"] == 3

    def test_stats_report_ttl(self, service):
        assert service.cache_stats()["ttl"] == 60.0


class TestLookups:
    """Tests for exact lookups."""

    def test_find_by_code_formatted(self, service):
        """Test formatted codes are accepted."""
        cnae = service.find_by_code("6201-5/01")
        assert cnae.codigo == "6201501"

    def test_find_by_code_missing(self, service):
        with pytest.raises(NotFoundError):
            service.find_by_code("0000000")

    @pytest.mark.parametrize("anexo", ["III", "iii", "Anexo III", AnexoSimples.ANEXO_III])
    def test_faixas_por_anexo(self, service, anexo):
        """Test annex given as label or enum."""
        faixas = service.faixas_por_anexo(anexo)
        assert len(faixas) == 6
        assert all(f.anexo == AnexoSimples.ANEXO_III for f in faixas)

    def test_faixas_invalid_anexo(self, service):
        with pytest.raises(ValidationError) as exc_info:
            service.faixas_por_anexo("VI")
        assert exc_info.value.campo == "anexo"
