from contextlib import asynccontextmanager
from typing import Any, Dict

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from car_price_agent import SearchOutcome, SearchSession
from car_price_agent.config import get_settings
from car_price_agent.logging import configure_logging, logger
from car_price_agent.utils import serialize_listing, serialize_message


class ChatRequest(BaseModel):
    message: str


def session_state(session: SearchSession) -> Dict[str, Any]:
    return {
        "messages": [serialize_message(m) for m in session.messages],
        "listings": [serialize_listing(c) for c in session.listings],
        "show_results": session.show_results,
        "next_start_page": session.next_start_page,
        "busy": session.busy,
    }


def _reply(session: SearchSession, outcome: SearchOutcome) -> Dict[str, Any]:
    if outcome is SearchOutcome.BUSY:
        raise HTTPException(status_code=409, detail="A search is already in progress.")
    if outcome is SearchOutcome.NO_LINEAGE:
        raise HTTPException(status_code=409, detail="Search for a budget before loading more cars.")
    if outcome is SearchOutcome.INVALID:
        raise HTTPException(status_code=422, detail="Message must not be empty.")
    return {"outcome": outcome.value, **session_state(session)}


def create_app(session: SearchSession | None = None) -> FastAPI:
    # One shared browsing session per process, as in the single-user web UI.
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await app.state.session.dispose()

    app = FastAPI(title="Car Price Assistant API", lifespan=lifespan)
    app.state.session = session or SearchSession(greet=True)

    # Enable CORS for local development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # In production, specify the exact origin
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.post("/chat")
    async def chat_endpoint(body: ChatRequest, request: Request):
        session: SearchSession = request.app.state.session
        outcome = await session.submit(body.message)
        logger.info("chat_handled", outcome=outcome.value, listings=len(session.listings))
        return _reply(session, outcome)

    @app.post("/load-more")
    async def load_more_endpoint(request: Request):
        session: SearchSession = request.app.state.session
        outcome = await session.load_more()
        logger.info("load_more_handled", outcome=outcome.value, listings=len(session.listings))
        return _reply(session, outcome)

    @app.get("/session")
    async def session_endpoint(request: Request):
        return session_state(request.app.state.session)

    @app.get("/")
    async def root():
        return {"status": "Car Price Assistant API is running", "docs": "/docs"}

    @app.get("/health")
    async def health_check():
        return {"status": "ok"}

    return app


if __name__ == "__main__":
    import uvicorn

    configure_logging(get_settings().log_level)
    uvicorn.run(create_app(), host="0.0.0.0", port=8080)
