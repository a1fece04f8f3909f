from fastapi import FastAPI
from contextlib import asynccontextmanager
import logging

import models  # noqa: F401  registers tables on Base.metadata
from database import Base, engine, settings
from api import chat_configs, commands, messages

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: 在應用啟動時建立資料庫表
    Base.metadata.create_all(bind=engine)
    yield


app = FastAPI(
    title="Planning Poker API",
    description="Session/estimation engine for a chat planning poker bot",
    version="1.0.0",
    lifespan=lifespan
)

# Include routers
app.include_router(commands.router)
app.include_router(messages.router)
app.include_router(chat_configs.router)


@app.get("/")
def root():
    return {"message": "Planning Poker API", "status": "ok"}


@app.get("/health")
def health():
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
