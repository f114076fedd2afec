"""
App assembly entry point.

Re-exports the FastAPI `app` from `spending_tracker.api.main`; running this
module directly serves it with uvicorn on the configured PORT.
"""

from spending_tracker.api.main import app  # noqa: F401

if __name__ == "__main__":
    import uvicorn

    from spending_tracker.utils.settings import get_app_settings

    uvicorn.run(app, host="0.0.0.0", port=get_app_settings().port)
