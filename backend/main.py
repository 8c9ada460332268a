"""
CodeBattle FastAPI Application

Main entry point for the CodeBattle API server.
Configures FastAPI with CORS, routes, problem responses and database.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from app.config import get_settings
from app.database import engine, init_db
from app.fixtures import FixturesManager
from app.api.dependencies import repositories_for
from app.api.problem import register_problem_handlers
from app.api.routes import battles, health, homepage, programmers, projects, tokens, users

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.

    Handles:
    - Database initialisation on startup
    - The repository container, built once per engine
    - Demo data when LOAD_FIXTURES is enabled
    """
    # Startup
    print(f"Starting {settings.APP_NAME} v{settings.VERSION}")
    init_db()
    repositories = repositories_for(engine)
    if settings.database.LOAD_FIXTURES:
        fixtures = FixturesManager(engine, repositories)
        fixtures.clear_tables()
        fixtures.populate_data()
    print(f"Server ready on {settings.server.HOST}:{settings.server.PORT}")

    yield

    # Shutdown
    print("Shutting down server...")
    engine.dispose()


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    description="Programmers battle projects through a REST API",
    lifespan=lifespan,
    debug=settings.DEBUG,
)

# Configure CORS
origins = [
    "http://localhost:5173",  # Vite default port
    "http://localhost:3000",  # Alternative React port
    "http://127.0.0.1:5173",
    "http://127.0.0.1:3000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_problem_handlers(app)

# Include routers
app.include_router(health.router, tags=["health"])
app.include_router(homepage.router)
app.include_router(users.router)
app.include_router(tokens.router)
app.include_router(programmers.router)
app.include_router(projects.router)
app.include_router(battles.router)


@app.get("/")
async def root() -> dict:
    """
    Root endpoint.

    Returns:
        dict: Welcome message and API information.
    """
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": settings.VERSION,
        "docs": "/docs",
        "api": "/api",
    }
