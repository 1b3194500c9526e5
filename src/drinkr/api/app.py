"""FastAPI application factory."""

import logging
from uuid import UUID

from fastapi import Depends, FastAPI, Query, Request, status
from fastapi.responses import JSONResponse
from postgrest.exceptions import APIError
from starlette.exceptions import HTTPException as StarletteHTTPException

from drinkr.api.auth import require_viewer
from drinkr.api.models import (
    AnalyticsResponse,
    CounterpartModel,
    ErrorResponse,
    FansResponse,
    PendingRequestModel,
    PendingRequestsResponse,
    SuggestionModel,
    SuggestionsResponse,
    TrendingItemModel,
    TrendingResponse,
    UnlockedAchievementModel,
    UnlockedAchievementsResponse,
    VersusResponse,
)
from drinkr.app_logging import configure_logging
from drinkr.containers import AppContainer
from drinkr.domain.analytics import TimeRange
from drinkr.domain.errors import (
    InvalidTimeRangeError,
    NotFriendsError,
    ProfileNotFoundError,
)
from drinkr.services.social import DISPLAY_TOP_N
from drinkr.services.time_ranges import parse_time_range

UPSTREAM_ERROR = "Upstream data error"


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI(title="drinkr analytics")
    app.state.container = container

    @app.exception_handler(StarletteHTTPException)
    async def http_error(_: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(ProfileNotFoundError)
    async def profile_not_found(_: Request, exc: ProfileNotFoundError) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, str(exc))

    @app.exception_handler(NotFriendsError)
    async def not_friends(_: Request, exc: NotFriendsError) -> JSONResponse:
        return _error(status.HTTP_403_FORBIDDEN, str(exc))

    @app.exception_handler(InvalidTimeRangeError)
    async def invalid_range(_: Request, exc: InvalidTimeRangeError) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(APIError)
    async def upstream_error(request: Request, exc: APIError) -> JSONResponse:
        logger.exception("Supabase query failed for %s", request.url.path)
        return _error(status.HTTP_502_BAD_GATEWAY, exc.message or UPSTREAM_ERROR)

    def resolve_range(
        raw: str | None = Query(default=None, alias="range"),
    ) -> TimeRange:
        if raw is None:
            return container.settings.default_time_range
        return parse_time_range(raw)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/analytics/me", response_model=AnalyticsResponse)
    def my_analytics(
        viewer_id: UUID = Depends(require_viewer),
        time_range: TimeRange = Depends(resolve_range),
    ) -> AnalyticsResponse:
        """Return the signed-in user's analytics dashboard."""
        timezone_name = container.profile_service.get_timezone(viewer_id)
        dashboard = container.stats_service.get_dashboard(
            viewer_id, time_range, timezone_name
        )
        return AnalyticsResponse.from_domain(dashboard)

    @app.get("/analytics/{username}", response_model=AnalyticsResponse)
    def friend_analytics(
        username: str,
        viewer_id: UUID = Depends(require_viewer),
        time_range: TimeRange = Depends(resolve_range),
    ) -> AnalyticsResponse:
        """Return a friend's analytics dashboard in the viewer's timezone."""
        profile = container.profile_service.get_by_username(username)
        container.social_service.ensure_friends(viewer_id, profile.id)
        timezone_name = container.profile_service.get_timezone(viewer_id)
        dashboard = container.stats_service.get_dashboard(
            profile.id, time_range, timezone_name
        )
        return AnalyticsResponse.from_domain(dashboard)

    @app.get("/versus/{username}", response_model=VersusResponse)
    def versus(
        username: str,
        viewer_id: UUID = Depends(require_viewer),
        time_range: TimeRange = Depends(resolve_range),
    ) -> VersusResponse:
        """Compare the signed-in user against a friend."""
        report = container.versus_service.compare(viewer_id, username, time_range)
        return VersusResponse.from_domain(report)

    @app.get("/friends/suggestions", response_model=SuggestionsResponse)
    def friend_suggestions(
        viewer_id: UUID = Depends(require_viewer),
    ) -> SuggestionsResponse:
        """Return friend-of-friend suggestions."""
        suggestions = container.social_service.get_suggestions(viewer_id)
        return SuggestionsResponse(
            items=[SuggestionModel.from_domain(item) for item in suggestions]
        )

    @app.get("/friends/pending-incoming", response_model=PendingRequestsResponse)
    def pending_requests(
        viewer_id: UUID = Depends(require_viewer),
    ) -> PendingRequestsResponse:
        """Return friend requests waiting on the signed-in user."""
        rows = container.social_service.get_pending_incoming(viewer_id)
        return PendingRequestsResponse(
            items=[PendingRequestModel.from_domain(row) for row in rows]
        )

    @app.get("/cheers/fans", response_model=FansResponse)
    def cheers_fans(viewer_id: UUID = Depends(require_viewer)) -> FansResponse:
        """Return top fans and the friends the user cheers most."""
        fans = container.social_service.get_top_fans(viewer_id)
        cheered = container.social_service.get_top_cheered(viewer_id)
        return FansResponse(
            top_fans=[
                CounterpartModel.from_domain(fan) for fan in fans[:DISPLAY_TOP_N]
            ],
            top_cheered=[
                CounterpartModel.from_domain(friend)
                for friend in cheered[:DISPLAY_TOP_N]
            ],
        )

    @app.get("/discover/trending", response_model=TrendingResponse)
    def trending(_: UUID = Depends(require_viewer)) -> TrendingResponse:
        """Return drinks trending this week."""
        items = container.discover_service.get_trending()
        return TrendingResponse(
            items=[TrendingItemModel.from_domain(item) for item in items]
        )

    @app.post("/achievements/check", response_model=UnlockedAchievementsResponse)
    def check_achievements(
        viewer_id: UUID = Depends(require_viewer),
    ) -> UnlockedAchievementsResponse:
        """Unlock achievements the signed-in user newly qualifies for."""
        unlocked = container.achievement_service.check_achievements(viewer_id)
        return UnlockedAchievementsResponse(
            items=[UnlockedAchievementModel.from_domain(item) for item in unlocked]
        )

    return app


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content=ErrorResponse(error=message).model_dump()
    )
