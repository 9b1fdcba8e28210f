"""
FastAPI Backend dla nawigacji po mapie świata.

Endpoints:
    GET  /api/maps       - lista map
    POST /api/session    - nowa sesja eksploracji
    GET  /api/map        - pola mapy
    PUT  /api/map        - podmiana pól (batch ingestion)
    GET  /api/render     - wpisy renderowania z sort order
    POST /api/click      - kliknięcie w punkcie świata
    POST /api/tick       - krok pętli ticków
    GET  /api/hero       - stan bohatera
    GET  /api/events     - log zdarzeń
    GET  /api/health     - health check
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from api.routers import map as map_router
from api.routers import hero
from api import session_state


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown events."""
    print("🚀 Hexnav API starting...")
    print(f"📁 Data from: {session_state.DATA_PATH}")
    yield
    print("👋 Hexnav API shutting down...")


app = FastAPI(
    title="Hexnav API",
    description="Hex world-map navigation: pathfinding, movement, persistence",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS - allow all origins (including file://)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(map_router.router, prefix="/api", tags=["Map"])
app.include_router(hero.router, prefix="/api", tags=["Hero"])


@app.get("/api/health")
async def health():
    """API health check."""
    return {"status": "healthy"}
