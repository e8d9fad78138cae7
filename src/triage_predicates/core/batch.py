"""Avaliação tabular: predicados aplicados linha a linha sobre um DataFrame.

Responsabilidades:
- Construir Subjects a partir de colunas de nome e tags.
- Produzir uma coluna booleana por predicado nomeado.
- Registrar eventos e warnings no EvaluationContext, quando fornecido.

Princípios:
- OBSERVAR sem mutar: o DataFrame de entrada nunca é alterado; o retorno
  é uma cópia enriquecida.

Célula de tags aceita:
- lista, tupla ou conjunto de tags
- string delimitada por ',' ou ';' (ex.: "FEVER; DRY_COUGH")
- None/NaN (sem tags)

Política de erros:
- errors="raise"  → a primeira linha inválida interrompe a avaliação
- errors="record" → linhas inválidas recebem None nas colunas de regra e
  um ErrorPayload serializável na coluna `error`
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import pandas as pd

from .context import EvaluationContext
from .errors import exception_to_payload
from .exceptions import InvalidPredicateError, InvalidSubjectError
from .predicate import Predicate, ensure_predicate
from .registry import PredicateRegistry
from .subject import Subject

BATCH_RULE_ID = "batch.evaluate_frame"
ERROR_COLUMN = "error"

_SPLIT = re.compile(r"[;,]")


def _is_missing(v: Any) -> bool:
    if v is None:
        return True
    if isinstance(v, (list, tuple, set, frozenset)):
        return False
    try:
        return bool(pd.isna(v))
    except (TypeError, ValueError):
        return False


def parse_tags_cell(value: Any) -> Tuple[str, ...]:
    """Converte uma célula de tags em tupla de tags brutas (sem normalizar)."""
    if _is_missing(value):
        return ()
    if isinstance(value, str):
        return tuple(t.strip() for t in _SPLIT.split(value) if t.strip())
    if isinstance(value, (list, tuple, set, frozenset)):
        return tuple(value)
    if hasattr(value, "tolist"):
        return tuple(value.tolist())
    raise InvalidSubjectError(
        message="Célula de tags com tipo não suportado",
        details={"received_type": type(value).__name__},
        hint="Use lista de tags ou string delimitada por ',' ou ';'.",
    )


def _require_columns(df: pd.DataFrame, columns: Sequence[str]) -> None:
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise InvalidSubjectError(
            message="Colunas obrigatórias ausentes no DataFrame",
            details={"missing_columns": missing, "columns": [str(c) for c in df.columns]},
        )


def _row_subject(row: pd.Series, *, name_column: str, tags_column: str) -> Subject:
    name = row[name_column]
    if _is_missing(name):
        raise InvalidSubjectError(
            message="Nome ausente na linha",
            details={"column": name_column},
        )
    return Subject(name=str(name), tags=parse_tags_cell(row[tags_column]))


def subjects_from_frame(
    df: pd.DataFrame,
    *,
    name_column: str = "name",
    tags_column: str = "tags",
) -> List[Subject]:
    _require_columns(df, [name_column, tags_column])
    return [
        _row_subject(row, name_column=name_column, tags_column=tags_column)
        for _, row in df.iterrows()
    ]


def _predicate_pairs(
    predicates: Union[Mapping[str, Predicate], PredicateRegistry],
) -> List[Tuple[str, Predicate]]:
    if isinstance(predicates, PredicateRegistry):
        pairs = predicates.items()
    elif isinstance(predicates, Mapping):
        pairs = list(predicates.items())
    else:
        raise InvalidPredicateError(
            message="predicates deve ser um mapa nome → Predicate ou PredicateRegistry",
            details={"received_type": type(predicates).__name__},
        )
    for rule_id, p in pairs:
        ensure_predicate(p, str(rule_id))
    return pairs


def evaluate_frame(
    df: pd.DataFrame,
    predicates: Union[Mapping[str, Predicate], PredicateRegistry],
    *,
    name_column: str = "name",
    tags_column: str = "tags",
    ctx: Optional[EvaluationContext] = None,
    errors: str = "raise",
) -> pd.DataFrame:
    """
    Avalia cada predicado sobre cada linha e devolve uma cópia enriquecida.

    Args:
        df (pd.DataFrame): Dataset de subjects.
        predicates: Mapa nome → predicado (ou PredicateRegistry); cada nome
            vira uma coluna.
        name_column (str): Coluna com o nome do subject.
        tags_column (str): Coluna com as tags do subject.
        ctx (Optional[EvaluationContext]): Contexto para eventos e warnings.
        errors (str): "raise" ou "record".

    Returns:
        pd.DataFrame: Cópia de `df` com uma coluna por predicado
        (e `error`, quando errors="record").

    Raises:
        ValueError: Se `errors` for inválido.
        InvalidPredicateError: Se um nome colidir com coluna existente.
        InvalidSubjectError: Linha inválida com errors="raise".
    """
    if errors not in ("raise", "record"):
        raise ValueError(f"errors deve ser 'raise' ou 'record', recebido: {errors}")

    _require_columns(df, [name_column, tags_column])
    pairs = _predicate_pairs(predicates)

    reserved = set(df.columns) | ({ERROR_COLUMN} if errors == "record" else set())
    clashes = [rid for rid, _ in pairs if rid in reserved]
    if clashes:
        raise InvalidPredicateError(
            message="Nome de predicado colide com coluna existente",
            details={"columns": clashes},
            hint="Renomeie a regra ou a coluna do DataFrame.",
        )

    values: Dict[str, List[Optional[bool]]] = {rid: [] for rid, _ in pairs}
    row_errors: List[Optional[Dict[str, Any]]] = []

    for idx, row in df.iterrows():
        try:
            subject = _row_subject(row, name_column=name_column, tags_column=tags_column)
            results = {rid: bool(p.is_satisfied_by(subject)) for rid, p in pairs}
        except Exception as e:
            if errors == "raise":
                raise
            payload = exception_to_payload(e).to_dict()
            payload["details"]["row"] = str(idx)
            row_errors.append(payload)
            for rid, _ in pairs:
                values[rid].append(None)
            if ctx is not None:
                ctx.log(
                    rule_id=BATCH_RULE_ID,
                    level="error",
                    message="row evaluation failed",
                    row=str(idx),
                    error_type=payload["type"],
                )
            continue

        if ctx is not None and not subject.tags:
            ctx.add_warning(
                rule_id=BATCH_RULE_ID,
                message=f"linha {idx}: subject '{subject.name}' sem tags",
            )
        row_errors.append(None)
        for rid, r in results.items():
            values[rid].append(r)

    out = df.copy()
    for rid, col in values.items():
        out[rid] = col
    if errors == "record":
        out[ERROR_COLUMN] = row_errors

    if ctx is not None:
        ctx.log(
            rule_id=BATCH_RULE_ID,
            level="info",
            message="frame evaluated",
            rows=int(df.shape[0]),
            rules=[rid for rid, _ in pairs],
            failed_rows=sum(1 for e in row_errors if e is not None),
        )

    return out
