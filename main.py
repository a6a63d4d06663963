import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bloghub.api.v1 import auth
from bloghub.core.config import configure_logging, get_settings
from bloghub.core.errors import register_exception_handlers
from bloghub.db.session import engine, init_db
from bloghub.routers import comment
from bloghub.routers import like
from bloghub.routers import post

settings = get_settings()
configure_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logging.info("Database tables ready")
    yield
    engine.dispose()
    logging.info("Database connections closed")


app = FastAPI(title="bloghub", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)
register_exception_handlers(app)

app.include_router(auth.router, prefix="/auth", tags=["Auth"])
app.include_router(post.router, prefix="/posts", tags=["Posts"])
app.include_router(comment.router, tags=["Comments"])
app.include_router(like.router, tags=["Likes"])


@app.get("/health", tags=["Health"])
def health():
    return {"status": "ok"}


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=settings.port)
