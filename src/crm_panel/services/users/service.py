"""Staff account management (admin only)."""

from __future__ import annotations

import logging

from fastapi.concurrency import run_in_threadpool

from ...data.gateway import SupabaseGateway
from ...errors import GatewayError, GatewayUnavailable
from ...models.domain import UserProfile
from ...state.notifications import Notifier

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


async def list_staff(gateway: SupabaseGateway, notifier: Notifier) -> list[UserProfile]:
    try:
        return await run_in_threadpool(gateway.list_profiles)
    except GatewayError as exc:
        logger.warning("Failed to list profiles: %s", exc.message)
        notifier.error("Erro ao carregar usuários")
        return []


async def create_staff_user(
    gateway: SupabaseGateway,
    notifier: Notifier,
    *,
    email: str,
    password: str,
    full_name: str,
) -> bool:
    if len(password) < MIN_PASSWORD_LENGTH:
        notifier.error(f"A senha deve ter pelo menos {MIN_PASSWORD_LENGTH} caracteres")
        return False
    try:
        user_id = await run_in_threadpool(gateway.sign_up, email, password, full_name)
    except GatewayUnavailable:
        raise
    except GatewayError as exc:
        logger.warning("Failed to create staff user %s: %s", email, exc.message)
        notifier.error(exc.message or "Erro ao criar usuário")
        return False
    logger.info("Created staff user %s", user_id)
    notifier.success("Usuário criado com sucesso")
    return True


async def change_role(gateway: SupabaseGateway, notifier: Notifier, user_id: str, role: str) -> bool:
    try:
        await run_in_threadpool(gateway.update_user_role, user_id, role)
    except GatewayUnavailable:
        raise
    except GatewayError as exc:
        logger.warning("Failed to change role of %s: %s", user_id, exc.message)
        notifier.error(exc.message or "Erro ao atualizar papel do usuário")
        return False
    logger.info("Role of %s changed to %s", user_id, role)
    notifier.success("Papel do usuário atualizado com sucesso")
    return True
