# src/secret_game/api/v1/endpoints/rooms.py
"""Room-scoped listings."""

from fastapi import APIRouter

from secret_game.schemas.secret import RoomSecretsResponse
from secret_game.services.errors import SecretGameError

from ..dependencies import CurrentUserDep, RoomSecretsViewDep, to_http_exception

router = APIRouter(prefix="/rooms", tags=["rooms"])


@router.get("/{room_id}/secrets", response_model=RoomSecretsResponse)
async def list_room_secrets(
    room_id: str,
    current_user: CurrentUserDep,
    view: RoomSecretsViewDep,
) -> RoomSecretsResponse:
    """List every visible secret in a room, newest first."""
    try:
        secrets = view.for_viewer(room_id, current_user.id)
    except SecretGameError as exc:
        raise to_http_exception(exc) from exc
    return RoomSecretsResponse(secrets=secrets)
