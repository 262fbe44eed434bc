"""Wire codec: request tipada -> bytes JSON, bytes JSON -> mapping genérico.

Esta capa es agnóstica del endpoint: no valida semántica, solo forma.
"""

from __future__ import annotations

import json
from typing import Any

from core.domain.errors import DecodeError
from core.domain.models import AuthRequest

RawResponseMapping = dict[str, Any]


def encode(request: AuthRequest) -> bytes:
    """Serializa la request a JSON canónico (claves ordenadas, sin espacios).

    Los opcionales sin valor se omiten; nunca se emiten como `null`.
    """

    payload = request.to_wire()
    return json.dumps(
        payload,
        ensure_ascii=False,
        separators=(",", ":"),
        sort_keys=True,
    ).encode("utf-8")


def decode(body: bytes) -> RawResponseMapping:
    """Parsea el body de la respuesta; el nivel superior debe ser un objeto."""

    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError(f"invalid utf-8 ({exc.reason})", body) from exc

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DecodeError(f"invalid json ({exc.msg} at pos {exc.pos})", body) from exc
    except (ValueError, RecursionError) as exc:
        # Enteros de más de 4300 dígitos o anidamiento excesivo.
        raise DecodeError(f"unparseable json ({type(exc).__name__})", body) from exc

    if not isinstance(payload, dict):
        raise DecodeError(f"top-level json is {type(payload).__name__}, expected object", body)
    return payload
