"""Map Gateway write errors onto form fields."""

from __future__ import annotations

from dataclasses import dataclass

from ...errors import GatewayError


@dataclass(frozen=True, slots=True)
class FieldError:
    field: str
    message: str


# Constraint name -> (form field, message). Keys are matched case-insensitively,
# and no key may be a substring of another.
CONSTRAINT_FIELDS: dict[str, tuple[str, str]] = {
    "customers_email_key": ("email", "Este e-mail já está cadastrado"),
    "email_format_check": ("email", "E-mail inválido"),
    "nome_length_check": ("name", "O nome deve ter entre 2 e 100 caracteres"),
    "telefone_format_check": ("phone", "Telefone inválido"),
    "endereco_length_check": ("address", "O endereço deve ter no máximo 200 caracteres"),
    "idade_range_check": ("age", "A idade deve estar entre 1 e 120"),
    "interesses_length_check": ("interests", "Máximo de 500 caracteres"),
    "sentimentos_length_check": ("feelings", "Máximo de 500 caracteres"),
    "valores_length_check": ("values", "Máximo de 500 caracteres"),
    "outras_informacoes_length_check": ("other_info", "Máximo de 1000 caracteres"),
}


def _rule(marker: str) -> FieldError:
    field, message = CONSTRAINT_FIELDS[marker]
    return FieldError(field=field, message=message)


def map_write_error(error: GatewayError) -> list[FieldError]:
    """Field errors for a failed write; empty when nothing is recognized.

    The structured constraint name wins. Otherwise the message and details
    are scanned for known constraint names, one error per name found.
    """
    if error.constraint:
        marker = error.constraint.lower()
        if marker in CONSTRAINT_FIELDS:
            return [_rule(marker)]

    haystack = " ".join(part for part in (error.message, error.details) if part).lower()
    return [_rule(marker) for marker in CONSTRAINT_FIELDS if marker in haystack]
