"""Create/edit/delete workflow behind the customer form."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional

from fastapi.concurrency import run_in_threadpool

from ...data.gateway import SupabaseGateway
from ...errors import GatewayError, GatewayUnavailable
from ...models.domain import Customer
from ...state.notifications import Notifier
from .errors import map_write_error
from .sanitizer import REQUIRED_MESSAGE, missing_fields, sanitize_form

logger = logging.getLogger(__name__)


@dataclass
class FormOutcome:
    ok: bool
    customer: Optional[Customer] = None
    field_errors: dict[str, str] = field(default_factory=dict)


class CustomerFormService:
    def __init__(
        self,
        gateway: SupabaseGateway,
        notifier: Notifier,
        on_saved: Callable[[], None] | None = None,
    ) -> None:
        self._gateway = gateway
        self._notifier = notifier
        self._on_saved = on_saved

    async def load(self, customer_id: str) -> Optional[Customer]:
        return await run_in_threadpool(self._gateway.get_customer, customer_id)

    async def submit(self, form: Mapping[str, Any], customer_id: str | None = None) -> FormOutcome:
        """Validate, sanitize and persist a form; edits are always marked as reviewed."""
        data = sanitize_form(form)
        missing = missing_fields(form, data)
        if missing:
            return FormOutcome(ok=False, field_errors={name: REQUIRED_MESSAGE for name in missing})

        action = "atualizar" if customer_id else "criar"
        try:
            if customer_id:
                data["reviewed"] = True
                saved = await run_in_threadpool(self._gateway.update_customer, customer_id, data)
            else:
                saved = await run_in_threadpool(self._gateway.insert_customer, data)
        except GatewayUnavailable:
            raise
        except GatewayError as exc:
            logger.warning("Failed to %s customer: %s (code=%s)", action, exc.message, exc.code)
            field_errors = map_write_error(exc)
            if not field_errors:
                self._notifier.error(f"Erro ao {action} cliente")
                return FormOutcome(ok=False)
            return FormOutcome(ok=False, field_errors={err.field: err.message for err in field_errors})

        self._notifier.success("Cliente atualizado com sucesso" if customer_id else "Cliente criado com sucesso")
        self._saved()
        return FormOutcome(ok=True, customer=saved)

    async def delete(self, customer_id: str) -> bool:
        try:
            await run_in_threadpool(self._gateway.delete_customer, customer_id)
        except GatewayUnavailable:
            raise
        except GatewayError as exc:
            logger.warning("Failed to delete customer %s: %s", customer_id, exc.message)
            self._notifier.error("Erro ao deletar cliente")
            return False
        self._notifier.success("Cliente deletado com sucesso")
        self._saved()
        return True

    def _saved(self) -> None:
        if self._on_saved is not None:
            self._on_saved()
