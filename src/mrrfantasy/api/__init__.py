"""REST API for the fantasy competition."""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass

from fastapi import Depends, FastAPI, Header, HTTPException, Request
from fastapi.responses import JSONResponse

from mrrfantasy.api.schemas import (
    CreateTeamRequest,
    LeagueDetailResponse,
    LeagueResponse,
    PerformanceResponse,
    PointsBreakdownResponse,
    RejectionResponse,
    SetPlayersRequest,
    StandingResponse,
    TeamResponse,
)
from mrrfantasy.config import DEFAULT_RULES, load_settings
from mrrfantasy.models import LeagueRecord, PerformanceRecord, RosterSelection, Standing, WeeklyPerformance
from mrrfantasy.persistence import ConflictError, FantasyStore
from mrrfantasy.roster import RosterRejected, materialize, points_breakdown, validate_roster
from mrrfantasy.standings import compute_standings


logger = logging.getLogger("uvicorn.error")


@dataclass(frozen=True)
class Identity:
    user_id: str
    full_name: str


def _not_found_detail(exc: KeyError) -> str:
    return str(exc.args[0]) if exc.args else "Not found"


def league_to_response(league: LeagueRecord) -> LeagueResponse:
    return LeagueResponse(
        league_id=league.league_id,
        name=league.name,
        invite_code=league.invite_code,
        created_by=league.created_by,
        created_at=league.created_at,
    )


def standing_to_response(standing: Standing) -> StandingResponse:
    return StandingResponse(
        user_id=standing.user_id,
        display_name=standing.display_name,
        team_name=standing.team_name,
        total_points=standing.total_points,
    )


def performance_to_response(record: PerformanceRecord) -> PerformanceResponse:
    return PerformanceResponse.model_validate(record.model_dump())


def rejection_to_response(rejection: RosterRejected) -> RejectionResponse:
    return RejectionResponse(
        reason=rejection.reason.value,
        detail=rejection.detail,
        context=dict(rejection.context),
    )


def create_app(store: FantasyStore | None = None) -> FastAPI:
    app = FastAPI(title="mrrfantasy")
    if store is None:
        store = FantasyStore(load_settings().db_path)
    app.state.store = store
    rules = DEFAULT_RULES

    @app.exception_handler(sqlite3.Error)
    async def storage_error(request: Request, exc: sqlite3.Error) -> JSONResponse:
        logger.error("Storage failure on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(status_code=500, content={"detail": "Storage unavailable"})

    async def current_identity(
        x_user_id: str | None = Header(None),
        x_user_name: str | None = Header(None),
    ) -> Identity:
        if not x_user_id or x_user_name is None:
            raise HTTPException(status_code=401, detail="Missing user identity")
        store.ensure_user(x_user_id, x_user_name)
        return Identity(user_id=x_user_id, full_name=x_user_name)

    def _standings_for(league_id: str) -> list[StandingResponse]:
        members = store.list_members(league_id)
        rosters = store.get_rosters([member.user_id for member in members])
        standings = compute_standings(members, rosters, store.catalog())
        return [standing_to_response(standing) for standing in standings]

    def _fetch_league_or_404(league_id: str) -> LeagueRecord:
        league = store.get_league(league_id)
        if league is None:
            raise HTTPException(status_code=404, detail="League not found")
        return league

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/teams", response_model=TeamResponse, status_code=201)
    async def create_team(body: CreateTeamRequest, identity: Identity = Depends(current_identity)):
        try:
            roster = store.create_roster(identity.user_id, body.name)
        except ConflictError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        logger.info("Created team %r for %s", roster.team_name, identity.user_id)
        return TeamResponse.from_display(materialize(roster, store.catalog()))

    @app.get("/teams/my", response_model=TeamResponse)
    async def get_my_team(identity: Identity = Depends(current_identity)):
        roster = store.get_roster(identity.user_id)
        if roster is None:
            raise HTTPException(status_code=404, detail="You don't have a fantasy team yet")
        return TeamResponse.from_display(materialize(roster, store.catalog()))

    @app.put("/teams/my/players", response_model=TeamResponse)
    async def set_team_players(body: SetPlayersRequest, identity: Identity = Depends(current_identity)):
        if store.get_roster(identity.user_id) is None:
            raise HTTPException(status_code=404, detail="You don't have a fantasy team yet")
        catalog = store.catalog()
        outcome = validate_roster(
            RosterSelection.build(body.starters, body.bench_player_ids, body.captain_id),
            owner_id=identity.user_id,
            owner_full_name=identity.full_name,
            catalog=catalog,
            rules=rules,
        )
        if isinstance(outcome, RosterRejected):
            raise HTTPException(status_code=400, detail=rejection_to_response(outcome).model_dump())
        try:
            stored = store.replace_roster(outcome.roster)
        except KeyError as exc:
            raise HTTPException(status_code=404, detail=_not_found_detail(exc)) from exc
        logger.info("Roster for %s replaced (generation %s)", identity.user_id, stored.generation)
        return TeamResponse.from_display(materialize(stored, catalog))

    @app.get("/teams/{owner_id}/points", response_model=PointsBreakdownResponse)
    async def get_team_points(owner_id: str):
        roster = store.get_roster(owner_id)
        if roster is None:
            raise HTTPException(status_code=404, detail="Team not found")
        return points_breakdown(materialize(roster, store.catalog()))

    @app.post("/points", response_model=PerformanceResponse, status_code=201)
    async def record_points(performance: WeeklyPerformance, replace: bool = False):
        try:
            record = store.record_performance(performance, replace=replace)
        except KeyError as exc:
            raise HTTPException(status_code=404, detail=_not_found_detail(exc)) from exc
        except ConflictError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        logger.info(
            "Recorded week %s for %s: %s points",
            record.week_number,
            record.player_id,
            record.total_points,
        )
        return performance_to_response(record)

    @app.get("/points/week/{week_number}", response_model=list[PerformanceResponse])
    async def get_week_points(week_number: int):
        return [performance_to_response(record) for record in store.list_week_performances(week_number)]

    @app.get("/points/player/{player_id}", response_model=list[PerformanceResponse])
    async def get_player_points(player_id: str):
        if store.get_player(player_id) is None:
            raise HTTPException(status_code=404, detail="Player not found")
        return [performance_to_response(record) for record in store.list_player_performances(player_id)]

    @app.get("/leagues/{league_id}", response_model=LeagueDetailResponse)
    async def get_league(league_id: str):
        league = _fetch_league_or_404(league_id)
        return LeagueDetailResponse(league=league_to_response(league), members=_standings_for(league_id))

    @app.get("/leagues/{league_id}/leaderboard", response_model=list[StandingResponse])
    async def get_leaderboard(league_id: str):
        _fetch_league_or_404(league_id)
        return _standings_for(league_id)

    return app
