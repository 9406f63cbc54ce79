import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from budget_tracker.core.config import settings
from budget_tracker.db.session import init_db
from budget_tracker.routers import (
    alerts,
    auth,
    digests,
    expenses,
    groceries,
    grocery_day,
    grocery_list,
    health,
    meal_plans,
    recommendations,
    savings_goals,
    scheduler as scheduler_router,
    shopping_lists,
)
from budget_tracker.utils.scheduler import start_scheduler, stop_scheduler

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    if settings.SCHEDULER_ENABLED:
        logger.info("Starting scheduler...")
        start_scheduler()
    yield
    if settings.SCHEDULER_ENABLED:
        logger.info("Stopping scheduler...")
        stop_scheduler()


app = FastAPI(
    title=settings.PROJECT_NAME,
    debug=settings.DEBUG,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
    max_age=3600,
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Validation error", "errors": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# Root endpoint
@app.get("/")
def root():
    return {"message": f"Welcome to {settings.PROJECT_NAME} API"}


# Register routers
app.include_router(health.router, prefix=f"{settings.API_PREFIX}", tags=["Health"])  # /api/health
app.include_router(auth.router, prefix=f"{settings.API_PREFIX}/auth", tags=["Auth"])
app.include_router(expenses.router, prefix=f"{settings.API_PREFIX}/expenses", tags=["Expenses"])
app.include_router(savings_goals.router, prefix=f"{settings.API_PREFIX}/savings-goals", tags=["Savings Goals"])
app.include_router(meal_plans.router, prefix=f"{settings.API_PREFIX}/meal-plans", tags=["Meal Plans"])
app.include_router(shopping_lists.router, prefix=f"{settings.API_PREFIX}/shopping-lists", tags=["Shopping Lists"])
app.include_router(groceries.router, prefix=f"{settings.API_PREFIX}/groceries", tags=["Groceries"])
app.include_router(grocery_day.router, prefix=f"{settings.API_PREFIX}/grocery-day", tags=["Groceries"])
app.include_router(grocery_list.router, prefix=f"{settings.API_PREFIX}/grocery-list", tags=["Groceries"])
app.include_router(recommendations.router, prefix=f"{settings.API_PREFIX}/recommendations", tags=["Recommendations"])
app.include_router(alerts.router, prefix=f"{settings.API_PREFIX}/alerts", tags=["Alerts"])
app.include_router(digests.router, prefix=f"{settings.API_PREFIX}/digests", tags=["Digests"])
app.include_router(scheduler_router.router, prefix=f"{settings.API_PREFIX}/scheduler", tags=["Scheduler"])
