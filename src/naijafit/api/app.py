"""FastAPI application factory."""

import logging
from datetime import date
from uuid import UUID

from fastapi import Depends, FastAPI, Header, HTTPException, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, Response

from naijafit.api.admin import router as admin_router
from naijafit.api.models import MealIn, ProfileIn, RegisterIn, UserUpdateIn, WeightIn
from naijafit.app_logging import configure_logging
from naijafit.containers import AppContainer
from naijafit.domain.codec import (
    meal_to_dict,
    profile_to_dict,
    stats_to_dict,
    user_to_dict,
)
from naijafit.domain.errors import (
    DuplicateUserError,
    ForeignRecordError,
    InvalidImportError,
    StorageError,
    UserNotFoundError,
)
from naijafit.domain.sessions import UserSession
from naijafit.services.meals import MealLogResult


def get_container(request: Request) -> AppContainer:
    """Return the container attached to the app."""
    return request.app.state.container


def get_session(
    x_user_id: UUID = Header(),
    container: AppContainer = Depends(get_container),
) -> UserSession:
    """Build the request-scoped session for the calling user."""
    return container.user_service.open_session(x_user_id)


def create_app(container: AppContainer) -> FastAPI:  # noqa: C901
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI(title="NaijaFit")
    app.state.container = container

    app.include_router(admin_router)

    @app.exception_handler(UserNotFoundError)
    async def user_not_found(_: Request, exc: UserNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(DuplicateUserError)
    async def duplicate_user(_: Request, exc: DuplicateUserError) -> JSONResponse:
        return JSONResponse(status_code=409, content={"detail": str(exc)})

    @app.exception_handler(ForeignRecordError)
    async def foreign_record(_: Request, exc: ForeignRecordError) -> JSONResponse:
        logger.warning("Rejected foreign record: %s", exc)
        return JSONResponse(status_code=403, content={"detail": str(exc)})

    @app.exception_handler(InvalidImportError)
    async def invalid_import(_: Request, exc: InvalidImportError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(StorageError)
    async def storage_failed(_: Request, exc: StorageError) -> JSONResponse:
        logger.error("Storage failure: %s", exc)
        return JSONResponse(status_code=503, content={"detail": "Storage unavailable"})

    @app.get("/health")
    def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/users", status_code=status.HTTP_201_CREATED)
    def register_user(
        payload: RegisterIn, container: AppContainer = Depends(get_container)
    ) -> dict[str, object]:
        """Register a user and create their stats record."""
        user = container.user_service.register(
            payload.email, payload.full_name, payload.weight
        )
        return {"user": user_to_dict(user)}

    @app.post("/meals", status_code=status.HTTP_201_CREATED)
    def log_meal(
        payload: MealIn,
        session: UserSession = Depends(get_session),
        container: AppContainer = Depends(get_container),
    ) -> dict[str, object]:
        """Log a meal for the calling user."""
        result = container.meal_log_service.log_meal(
            session,
            meal_type=payload.type,
            day=payload.date,
            time=payload.time,
            portions=[food.to_domain() for food in payload.foods],
            mood=payload.mood,
            notes=payload.notes,
        )
        return _result_body(result)

    @app.get("/meals")
    def list_meals(
        start: date | None = None,
        end: date | None = None,
        session: UserSession = Depends(get_session),
        container: AppContainer = Depends(get_container),
    ) -> dict[str, object]:
        """List the calling user's meals within an optional date range."""
        meals = container.meal_log_service.list_meals(session, start, end)
        return {"meals": [meal_to_dict(meal) for meal in meals]}

    @app.get("/meals/{day}")
    def meals_on(
        day: date,
        session: UserSession = Depends(get_session),
        container: AppContainer = Depends(get_container),
    ) -> dict[str, object]:
        """List the calling user's meals for one day."""
        meals = container.meal_log_service.meals_on(session, day)
        return {"meals": [meal_to_dict(meal) for meal in meals]}

    @app.delete("/meals/{meal_id}")
    def delete_meal(
        meal_id: UUID,
        session: UserSession = Depends(get_session),
        container: AppContainer = Depends(get_container),
    ) -> dict[str, object]:
        """Delete one of the calling user's meals."""
        result = container.meal_log_service.delete_meal(session, meal_id)
        if result is None:
            raise HTTPException(status_code=404, detail="Meal not found")
        return _result_body(result)

    @app.get("/stats")
    def get_stats(
        session: UserSession = Depends(get_session),
        container: AppContainer = Depends(get_container),
    ) -> dict[str, object]:
        """Return the calling user's stats."""
        stats = container.stats_service.get_stats(session.user_id)
        return {"stats": stats_to_dict(stats)}

    @app.post("/stats/weight")
    def record_weight(
        payload: WeightIn,
        session: UserSession = Depends(get_session),
        container: AppContainer = Depends(get_container),
    ) -> dict[str, object]:
        """Record a body weight sample."""
        stats = container.meal_log_service.record_weight(
            session, payload.date, payload.weight
        )
        return {"stats": stats_to_dict(stats)}

    @app.get("/export")
    def export_data(
        session: UserSession = Depends(get_session),
        container: AppContainer = Depends(get_container),
    ) -> Response:
        """Download the calling user's data."""
        document = container.export_service.export_user_data(session)
        return Response(
            content=document,
            media_type="application/json",
            headers={"Content-Disposition": "attachment; filename=naijafit.json"},
        )

    @app.post("/import")
    async def import_data(
        request: Request,
        session: UserSession = Depends(get_session),
        container: AppContainer = Depends(get_container),
    ) -> dict[str, object]:
        """Merge an exported document into the calling user's data."""
        body = (await request.body()).decode("utf-8")
        # Runs off the event loop; the import waits on the per-user lock.
        summary = await run_in_threadpool(
            container.export_service.import_user_data, session, body
        )
        return {
            "users": summary.users,
            "meals_added": summary.meals_added,
            "meals_skipped": summary.meals_skipped,
            "profiles": summary.profiles,
            "weights_added": summary.weights_added,
        }

    @app.patch("/users/me")
    def update_user(
        payload: UserUpdateIn,
        session: UserSession = Depends(get_session),
        container: AppContainer = Depends(get_container),
    ) -> dict[str, object]:
        """Change the calling user's personal details."""
        user = container.user_service.update_user(session, payload.changes())
        return {"user": user_to_dict(user)}

    @app.get("/profile")
    def get_profile(
        session: UserSession = Depends(get_session),
        container: AppContainer = Depends(get_container),
    ) -> dict[str, object]:
        """Return the calling user's profile."""
        profile = container.profile_service.get_profile(session)
        return {"profile": profile_to_dict(profile)}

    @app.put("/profile")
    def update_profile(
        payload: ProfileIn,
        session: UserSession = Depends(get_session),
        container: AppContainer = Depends(get_container),
    ) -> dict[str, object]:
        """Replace the calling user's profile."""
        profile = container.profile_service.update_profile(
            session, payload.to_domain(session.user_id)
        )
        return {"profile": profile_to_dict(profile)}

    return app


def _result_body(result: MealLogResult) -> dict[str, object]:
    return {
        "meal": meal_to_dict(result.meal) if result.meal else None,
        "stats": stats_to_dict(result.stats) if result.stats else None,
        "stats_available": result.stats is not None,
    }
