from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

import structlog
from fastapi import APIRouter, HTTPException, Query, Request

from quiz_ladder.api.routes.internal_ladder_models import (
    LadderAnswerRequest,
    LadderAnswerResponse,
    LadderGameListResponse,
    LadderGameResponse,
    LadderHelpRequest,
    LadderHelpResponse,
    LadderQuestionResponse,
    LadderStartRequest,
    LadderTakeMoneyRequest,
)
from quiz_ladder.core.config import get_settings
from quiz_ladder.core.logging import bind_game_context
from quiz_ladder.db.session import SessionLocal
from quiz_ladder.economy.ledger.errors import LedgerUserNotFoundError
from quiz_ladder.game.ladder.errors import (
    ActiveGameExistsError,
    GameAlreadyFinishedError,
    GameNotFoundError,
    InsufficientQuestionPoolError,
    InvalidSlotLabelError,
    LadderGameError,
    LifelineAlreadyUsedError,
    PlayerNotFoundError,
    UnknownLifelineError,
)
from quiz_ladder.game.ladder.presentation import display_status_label
from quiz_ladder.game.ladder.service import LadderGameService
from quiz_ladder.game.ladder.types import Game
from quiz_ladder.services.internal_auth import (
    extract_client_ip,
    is_client_ip_allowed,
    is_internal_request_authenticated,
)

router = APIRouter(tags=["internal", "ladder"])
logger = structlog.get_logger(__name__)

_ERROR_RESPONSES: tuple[tuple[type[Exception], int, str], ...] = (
    (GameNotFoundError, 404, "E_LADDER_GAME_NOT_FOUND"),
    (PlayerNotFoundError, 404, "E_LADDER_USER_NOT_FOUND"),
    (LedgerUserNotFoundError, 404, "E_LADDER_USER_NOT_FOUND"),
    (ActiveGameExistsError, 409, "E_LADDER_ACTIVE_GAME_EXISTS"),
    (GameAlreadyFinishedError, 409, "E_LADDER_GAME_FINISHED"),
    (LifelineAlreadyUsedError, 409, "E_LADDER_LIFELINE_USED"),
    (InvalidSlotLabelError, 422, "E_LADDER_INVALID_LETTER"),
    (UnknownLifelineError, 422, "E_LADDER_UNKNOWN_LIFELINE"),
    (InsufficientQuestionPoolError, 503, "E_LADDER_QUESTION_POOL_EMPTY"),
)


def _as_http_error(exc: Exception) -> HTTPException:
    for error_type, status_code, code in _ERROR_RESPONSES:
        if isinstance(exc, error_type):
            detail: dict[str, str] = {"code": code}
            if isinstance(exc, ActiveGameExistsError) and exc.game_id is not None:
                detail["game_id"] = str(exc.game_id)
            return HTTPException(status_code=status_code, detail=detail)
    return HTTPException(status_code=400, detail={"code": "E_LADDER_REJECTED"})


def _game_as_response(game: Game) -> LadderGameResponse:
    question = game.current_question if not game.is_finished else None
    return LadderGameResponse(
        game_id=game.game_id,
        user_id=game.user_id,
        status=game.status.value,
        status_label=display_status_label(game.status),
        current_level=game.current_level,
        max_level=game.max_level,
        prize=game.prize,
        used_lifelines=sorted(lifeline.value for lifeline in game.used_lifelines),
        created_at=game.created_at,
        finished_at=game.finished_at,
        current_question=(
            LadderQuestionResponse(
                level=question.level,
                text=question.template.text,
                variants=question.variants,
                help=dict(question.help_payloads),
            )
            if question is not None
            else None
        ),
    )


def _assert_internal_access(request: Request) -> None:
    settings = get_settings()
    client_ip = extract_client_ip(
        request,
        trusted_proxies=getattr(settings, "internal_api_trusted_proxies", ""),
    )

    if not is_client_ip_allowed(client_ip=client_ip, allowlist=settings.internal_api_allowlist):
        logger.warning("internal_ladder_auth_failed", reason="ip_not_allowed", client_ip=client_ip)
        raise HTTPException(status_code=403, detail={"code": "E_FORBIDDEN"})

    if not is_internal_request_authenticated(request, expected_token=settings.internal_api_token):
        logger.warning(
            "internal_ladder_auth_failed",
            reason="invalid_credentials",
            client_ip=client_ip,
        )
        raise HTTPException(status_code=403, detail={"code": "E_FORBIDDEN"})


@router.post("/internal/ladder/games", response_model=LadderGameResponse, status_code=201)
async def start_game(payload: LadderStartRequest, request: Request) -> LadderGameResponse:
    _assert_internal_access(request)
    bind_game_context(user_id=payload.user_id)

    try:
        async with SessionLocal.begin() as session:
            game = await LadderGameService.start_game(
                session,
                user_id=payload.user_id,
                now_utc=datetime.now(timezone.utc),
            )
    except LadderGameError as exc:
        raise _as_http_error(exc) from exc
    return _game_as_response(game)


@router.get("/internal/ladder/games/{game_id}", response_model=LadderGameResponse)
async def show_game(
    game_id: UUID,
    request: Request,
    user_id: int = Query(gt=0),
) -> LadderGameResponse:
    _assert_internal_access(request)

    try:
        async with SessionLocal() as session:
            game = await LadderGameService.get_game(session, user_id=user_id, game_id=game_id)
    except LadderGameError as exc:
        raise _as_http_error(exc) from exc
    return _game_as_response(game)


@router.get("/internal/ladder/users/{user_id}/games", response_model=LadderGameListResponse)
async def list_games(
    user_id: int,
    request: Request,
    limit: int = Query(default=20, ge=1, le=100),
) -> LadderGameListResponse:
    _assert_internal_access(request)

    async with SessionLocal() as session:
        games = await LadderGameService.list_games(session, user_id=user_id, limit=limit)
    return LadderGameListResponse(games=[_game_as_response(game) for game in games])


@router.get("/internal/ladder/users/{user_id}/active-game", response_model=LadderGameResponse)
async def show_active_game(user_id: int, request: Request) -> LadderGameResponse:
    _assert_internal_access(request)

    async with SessionLocal() as session:
        game = await LadderGameService.get_active_game(session, user_id=user_id)
    if game is None:
        raise HTTPException(status_code=404, detail={"code": "E_LADDER_NO_ACTIVE_GAME"})
    return _game_as_response(game)


@router.post("/internal/ladder/games/{game_id}/answer", response_model=LadderAnswerResponse)
async def answer(
    game_id: UUID,
    payload: LadderAnswerRequest,
    request: Request,
) -> LadderAnswerResponse:
    _assert_internal_access(request)
    bind_game_context(user_id=payload.user_id, game_id=game_id)

    try:
        async with SessionLocal.begin() as session:
            game, outcome = await LadderGameService.answer(
                session,
                user_id=payload.user_id,
                game_id=game_id,
                slot_label=payload.letter,
                now_utc=datetime.now(timezone.utc),
            )
    except (LadderGameError, LedgerUserNotFoundError) as exc:
        raise _as_http_error(exc) from exc
    return LadderAnswerResponse(
        advanced=outcome.advanced,
        correct_letter=outcome.correct_slot if game.is_finished else None,
        game=_game_as_response(game),
    )


@router.post("/internal/ladder/games/{game_id}/take-money", response_model=LadderGameResponse)
async def take_money(
    game_id: UUID,
    payload: LadderTakeMoneyRequest,
    request: Request,
) -> LadderGameResponse:
    _assert_internal_access(request)
    bind_game_context(user_id=payload.user_id, game_id=game_id)

    try:
        async with SessionLocal.begin() as session:
            game = await LadderGameService.take_money(
                session,
                user_id=payload.user_id,
                game_id=game_id,
                now_utc=datetime.now(timezone.utc),
            )
    except (LadderGameError, LedgerUserNotFoundError) as exc:
        raise _as_http_error(exc) from exc
    return _game_as_response(game)


@router.post("/internal/ladder/games/{game_id}/help", response_model=LadderHelpResponse)
async def use_help(
    game_id: UUID,
    payload: LadderHelpRequest,
    request: Request,
) -> LadderHelpResponse:
    _assert_internal_access(request)
    bind_game_context(user_id=payload.user_id, game_id=game_id)

    try:
        async with SessionLocal.begin() as session:
            game, hint = await LadderGameService.use_lifeline(
                session,
                user_id=payload.user_id,
                game_id=game_id,
                lifeline=payload.help_type,
            )
    except LadderGameError as exc:
        raise _as_http_error(exc) from exc
    return LadderHelpResponse(
        help_type=payload.help_type,
        payload=hint,
        game=_game_as_response(game),
    )
