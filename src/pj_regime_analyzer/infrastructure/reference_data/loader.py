"""Loader for the JSON reference tables (Simples brackets and CNAE classifications)."""

import json
import logging
from decimal import Decimal
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from pj_regime_analyzer.core.models.enums import AnexoSimples
from pj_regime_analyzer.core.models.reference import (
    ActivityClassification,
    BracketRow,
    ReferenceData,
)
from pj_regime_analyzer.shared.exceptions import ReferenceDataError

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent / "data"
FAIXAS_FILE = "faixas.json"
CNAE_FILE = "cnae.json"


def load_reference_data(data_dir: Optional[Union[str, Path]] = None) -> ReferenceData:
    """Load and validate the reference tables.

    Args:
        data_dir: Directory with faixas.json and cnae.json (default: packaged data)

    Returns:
        Immutable ReferenceData

    Raises:
        ReferenceDataError: If a file is missing, unreadable or inconsistent
    """
    base = Path(data_dir) if data_dir is not None else DATA_DIR

    faixas = parse_faixas(_read_json(base / FAIXAS_FILE))
    classificacoes = parse_cnaes(_read_json(base / CNAE_FILE))

    referencia = ReferenceData(faixas, classificacoes)
    logger.info(
        "Dados de referência carregados de %s: %d faixas, %d CNAEs",
        base,
        len(faixas),
        len(classificacoes),
    )
    return referencia


def parse_faixas(payload: Any) -> list[BracketRow]:
    """Build bracket rows from ``{"anexos": {"I": [...], ...}}``."""
    if not isinstance(payload, dict) or not isinstance(payload.get("anexos"), dict):
        raise ReferenceDataError(f"{FAIXAS_FILE}: chave 'anexos' ausente ou inválida")

    rows: list[BracketRow] = []
    for anexo_key, linhas in payload["anexos"].items():
        try:
            anexo = AnexoSimples(anexo_key)
        except ValueError as e:
            raise ReferenceDataError(f"{FAIXAS_FILE}: anexo desconhecido '{anexo_key}'") from e

        if not isinstance(linhas, list):
            raise ReferenceDataError(f"{FAIXAS_FILE}: {anexo.label} deve ser uma lista")

        for linha in linhas:
            try:
                rows.append(BracketRow(anexo=anexo, **linha))
            except (PydanticValidationError, TypeError) as e:
                raise ReferenceDataError(f"{FAIXAS_FILE}: linha inválida no {anexo.label}: {e}") from e

    return rows


def parse_cnaes(payload: Any) -> list[ActivityClassification]:
    """Build classifications from ``{"cnaes": [...]}``."""
    if not isinstance(payload, dict) or not isinstance(payload.get("cnaes"), list):
        raise ReferenceDataError(f"{CNAE_FILE}: chave 'cnaes' ausente ou inválida")

    classificacoes: list[ActivityClassification] = []
    for item in payload["cnaes"]:
        try:
            classificacoes.append(ActivityClassification(**item))
        except (PydanticValidationError, TypeError) as e:
            raise ReferenceDataError(f"{CNAE_FILE}: registro inválido {item!r}: {e}") from e

    return classificacoes


def _read_json(path: Path) -> Any:
    """Read a JSON file keeping every number as Decimal."""
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f, parse_float=Decimal, parse_int=Decimal)
    except FileNotFoundError as e:
        raise ReferenceDataError(f"Arquivo de referência não encontrado: {path}") from e
    except (OSError, json.JSONDecodeError) as e:
        raise ReferenceDataError(f"Erro ao ler {path}: {e}") from e
