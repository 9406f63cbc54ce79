import uvicorn

from budget_tracker.core.config import settings

if __name__ == "__main__":
    uvicorn.run("budget_tracker.main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)
