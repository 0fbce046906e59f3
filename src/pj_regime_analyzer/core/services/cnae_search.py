"""CNAE lookup service with a small time-boxed result cache."""

import logging
import math
import threading
import time
from typing import Callable, Union

from pydantic import BaseModel

from pj_regime_analyzer.core.models.enums import AnexoSimples
from pj_regime_analyzer.core.models.reference import (
    ActivityClassification,
    BracketRow,
    ReferenceData,
)
from pj_regime_analyzer.shared.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_TTL = 300.0  # 5 minutos
DEFAULT_LIMIT = 20
MAX_LIMIT = 100


class CnaePage(BaseModel):
    """One page of CNAE search results."""

    items: list[ActivityClassification]
    total: int
    page: int
    limit: int
    total_pages: int

    model_config = {"frozen": True}


class CnaeSearchService:
    """Paginated CNAE search over the reference data.

    Pages are cached per (term, page, limit) for ``ttl`` seconds. The cache is
    shared by every caller of the instance and guarded by a single lock.
    """

    def __init__(
        self,
        referencia: ReferenceData,
        ttl: float = DEFAULT_TTL,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.referencia = referencia
        self.ttl = ttl
        self._clock = clock
        self._cache: dict[tuple[str, int, int], tuple[float, CnaePage]] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def search(self, termo: str = "", page: int = 1, limit: int = DEFAULT_LIMIT) -> CnaePage:
        """Search by code digits or description.

        Raises:
            ValidationError: If page < 1 or limit is outside 1..100
        """
        if page < 1:
            raise ValidationError("page deve ser maior ou igual a 1", campo="page", valor=page)
        if not 1 <= limit <= MAX_LIMIT:
            raise ValidationError(
                f"limit deve estar entre 1 e {MAX_LIMIT}", campo="limit", valor=limit
            )

        chave = ((termo or "").strip().lower(), page, limit)
        agora = self._clock()

        with self._lock:
            cached = self._cache.get(chave)
            if cached is not None:
                expira_em, pagina = cached
                if agora < expira_em:
                    self._hits += 1
                    logger.debug("Cache hit para busca CNAE %r", chave)
                    return pagina
                del self._cache[chave]
            self._misses += 1

        logger.debug("Cache miss para busca CNAE %r", chave)
        pagina = self._paginate(chave[0], page, limit)

        with self._lock:
            self._purge_expired(agora)
            self._cache[chave] = (agora + self.ttl, pagina)
        return pagina

    def find_by_code(self, codigo: str) -> ActivityClassification:
        """Exact lookup; accepts formatted codes such as 6201-5/01.

        Raises:
            NotFoundError: If the code is not in the reference data
        """
        digitos = "".join(c for c in codigo if c.isdigit())
        classificacao = self.referencia.classification_for(digitos)
        if classificacao is None:
            raise NotFoundError(f"CNAE {codigo} não encontrado")
        return classificacao

    def faixas_por_anexo(self, anexo: Union[str, AnexoSimples]) -> tuple[BracketRow, ...]:
        """Bracket table of an annex ("III", "Anexo III" or AnexoSimples).

        Raises:
            ValidationError: If the annex is unknown
        """
        if not isinstance(anexo, AnexoSimples):
            valor = str(anexo).strip().upper().removeprefix("ANEXO").strip()
            try:
                anexo = AnexoSimples(valor)
            except ValueError as e:
                raise ValidationError(
                    f"Anexo inválido: {anexo}", campo="anexo", valor=anexo
                ) from e
        return self.referencia.brackets_for(anexo)

    def clear_cache(self) -> None:
        """Drop every cached page."""
        with self._lock:
            self._cache.clear()
        logger.debug("Cache de busca CNAE limpo")

    def cache_stats(self) -> dict[str, float]:
        """Entries, hits, misses and TTL of the result cache."""
        with self._lock:
            return {
                "size": len(self._cache),
                "hits": self._hits,
                "misses": self._misses,
                "ttl": self.ttl,
            }

    def _purge_expired(self, agora: float) -> None:
        """Drop expired pages; caller holds the lock."""
        expiradas = [k for k, (expira_em, _) in self._cache.items() if expira_em <= agora]
        for chave in expiradas:
            del self._cache[chave]

    def _paginate(self, termo: str, page: int, limit: int) -> CnaePage:
        resultados = self.referencia.search(termo)
        total = len(resultados)
        inicio = (page - 1) * limit
        return CnaePage(
            items=resultados[inicio : inicio + limit],
            total=total,
            page=page,
            limit=limit,
            total_pages=math.ceil(total / limit) if total else 0,
        )
