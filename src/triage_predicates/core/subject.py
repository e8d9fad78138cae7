"""
Modelo canônico de Subject.

Este módulo define o `Subject`, o valor contra o qual predicados são
avaliados: uma entidade identificada por nome e por um conjunto de tags
(atributos) não ordenado e deduplicado.

Princípios fundamentais:
    - O Subject é imutável após construído
    - Tags são normalizadas (strip + upper) para comparação estável
    - O conjunto de tags pode ser vazio

Responsabilidades do módulo:
    - Validar e normalizar nome e tags
    - Oferecer consultas de pertinência consumidas pelos predicados
    - Oferecer (de)serialização simples via dict

Invariantes:
    - `tags` é sempre um `frozenset[str]`
    - Nenhuma tag é vazia
    - Duas construções com as mesmas tags (em qualquer ordem, caixa ou
      repetição) produzem Subjects iguais

Limites explícitos:
    - Não avalia regras
    - Não conhece predicados nem combinators
    - Não persiste dados

Este módulo existe para garantir um modelo de dados mínimo,
previsível e seguro para avaliação de predicados.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, Mapping

from .exceptions import InvalidSubjectError


def normalize_tag(tag: Any) -> str:
    """
    Normaliza uma tag para sua forma canônica.

    Política de normalização (v1):
        - membros de `Enum` são convertidos para `.value`
        - espaços nas extremidades são removidos
        - o texto é convertido para maiúsculas

    Args:
        tag (Any): Tag bruta (str ou Enum com valor str).

    Returns:
        str: Tag canônica.

    Raises:
        InvalidSubjectError: Se a tag não for string ou ficar vazia.
    """
    if isinstance(tag, Enum):
        tag = tag.value

    if not isinstance(tag, str):
        raise InvalidSubjectError(
            message="Tag deve ser string",
            details={"received_type": type(tag).__name__},
            hint="Use strings (ex.: 'FEVER') ou membros de Enum com valor string.",
        )

    out = tag.strip().upper()
    if not out:
        raise InvalidSubjectError(
            message="Tag vazia não é permitida",
            details={"tag": tag},
        )
    return out


def normalize_tags(tags: Iterable[Any]) -> FrozenSet[str]:
    """Normaliza uma coleção de tags para `frozenset[str]`."""
    if tags is None:
        return frozenset()

    # string solta seria iterada caractere a caractere
    if isinstance(tags, (str, bytes)):
        raise InvalidSubjectError(
            message="Tags devem ser uma coleção, não uma string",
            details={"received": str(tags)},
            hint="Passe uma lista, tupla ou conjunto de tags (ex.: ['FEVER']).",
        )

    try:
        items = list(tags)
    except TypeError as e:
        raise InvalidSubjectError(
            message="Tags devem ser iteráveis",
            details={"received_type": type(tags).__name__},
        ) from e

    return frozenset(normalize_tag(t) for t in items)


@dataclass(frozen=True)
class Subject:
    """
    Entidade avaliada por predicados.

    Campos:
        - name: identificador humano do subject
        - tags: conjunto canônico de tags

    Decisões arquiteturais:
        - Imutabilidade garante que predicados sejam funções puras
        - Normalização acontece na construção, nunca na avaliação
        - Igualdade e hash consideram nome e tags

    Exemplo:
        >>> Subject("Maria", ["fever", "FEVER", "dry_cough"]).tags == {"FEVER", "DRY_COUGH"}
        True
    """

    name: str
    tags: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidSubjectError(
                message="Subject.name deve ser string não vazia",
                details={"name": repr(self.name)},
            )
        # frozen: atribuição via object.__setattr__
        object.__setattr__(self, "tags", normalize_tags(self.tags))

    # -----------------------------
    # Consultas
    # -----------------------------
    def has_tag(self, tag: Any) -> bool:
        return normalize_tag(tag) in self.tags

    def has_all(self, tags: Iterable[Any]) -> bool:
        return normalize_tags(tags) <= self.tags

    def has_any(self, tags: Iterable[Any]) -> bool:
        return not self.tags.isdisjoint(normalize_tags(tags))

    # -----------------------------
    # (De)serialização
    # -----------------------------
    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Subject":
        if not isinstance(data, Mapping):
            raise InvalidSubjectError(
                message="Subject deve ser construído a partir de um mapa",
                details={"received_type": type(data).__name__},
            )
        if "name" not in data:
            raise InvalidSubjectError(
                message="Campo obrigatório ausente: name",
                details={"keys": sorted(str(k) for k in data.keys())},
            )
        return cls(name=data["name"], tags=data.get("tags") or ())

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "tags": sorted(self.tags)}
