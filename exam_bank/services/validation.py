"""
Validation rules that sit on top of the request schemas.

Field shape (required, max length, minimum sizes) is declared on the pydantic
models in ``exam_bank.api.schemas``; this module turns their failures into the
messages clients see, and holds the rules that need more than one field or a
look at storage.
"""
from typing import Any, Dict, Iterable, List, Sequence, Tuple

from exam_bank.core.exceptions import ReferentialViolationError

INVALID_DATA_MESSAGE = "Dados inválidos"
NO_CORRECT_ALTERNATIVE_MESSAGE = "Deve haver pelo menos uma alternativa correta"

# field -> (required message, size message)
FIELD_MESSAGES: Dict[str, Tuple[str, str]] = {
    "title": ("O título é obrigatório", "O título deve ter no máximo {max_length} caracteres"),
    "subject": ("A disciplina é obrigatória", "A disciplina deve ter no máximo {max_length} caracteres"),
    "description": (
        "A descrição da alternativa é obrigatória",
        "A descrição deve ter no máximo {max_length} caracteres",
    ),
    "alternatives": ("É necessário pelo menos uma alternativa", "Deve haver pelo menos {min_length} alternativas"),
    "questionIds": ("É necessário pelo menos uma questão", "Deve haver pelo menos {min_length} questão"),
}
FIELD_MESSAGES["question_ids"] = FIELD_MESSAGES["questionIds"]

_REQUIRED_TYPES = {"missing", "string_too_short", "blank_string"}
# a JSON null where a value is required
_NULL_TYPES = {"string_type", "list_type"}
_SIZE_TYPES = {"string_too_long", "too_short"}


def _field_name(loc: Sequence[Any]) -> str:
    for part in reversed(loc):
        if isinstance(part, str):
            return part
    return ""


def translate_error(error: Dict[str, Any]) -> str:
    """Render one pydantic error as a client-facing message."""
    loc = error.get("loc", ())
    field = _field_name(loc)
    kind = error.get("type", "")
    messages = FIELD_MESSAGES.get(field)
    if messages and (kind in _REQUIRED_TYPES or (kind in _NULL_TYPES and error.get("input") is None)):
        return messages[0]
    if messages and kind in _SIZE_TYPES:
        return messages[1].format(**(error.get("ctx") or {}))
    path = ".".join(str(p) for p in loc if p != "body") or "body"
    return f"{path}: {error.get('msg', 'valor inválido')}"


def translate_errors(errors: Iterable[Dict[str, Any]]) -> List[str]:
    return [translate_error(e) for e in errors]


def ensure_has_correct_alternative(alternatives: Iterable[Any]) -> None:
    if not any(getattr(a, "correct", False) for a in alternatives):
        raise ReferentialViolationError(NO_CORRECT_ALTERNATIVE_MESSAGE)


def unique_ids(ids: Iterable[int]) -> List[int]:
    """Drop repeated IDs, keeping first occurrences in order."""
    return list(dict.fromkeys(ids))


def missing_ids(requested: Iterable[int], existing: Iterable[int]) -> List[int]:
    found = set(existing)
    return [i for i in unique_ids(requested) if i not in found]


def ensure_questions_exist(requested: Sequence[int], existing: Iterable[int]) -> None:
    """Reject the whole request when any requested question is absent.

    The lookup that produced ``existing`` does not lock rows, so a question may
    still disappear before the write commits.
    """
    missing = missing_ids(requested, existing)
    if missing:
        joined = ", ".join(str(i) for i in missing)
        raise ReferentialViolationError(f"Questões com IDs {joined} não foram encontradas")
