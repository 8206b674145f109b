"""
FastAPI back-end for the collectible pet Mini-App
────────────────────────────────────────────────────────────
• Identifies callers from Telegram Web-App initData (init-data-py)
• Keeps pet stats in an in-memory store; hunger & happiness decay per interval
• Exposes:
      POST /pets               – mint a pet for the caller
      GET  /pets/{id}          – read (with decay, nothing saved)
      POST /pets/{id}/feed     – owner only
      POST /pets/{id}/train    – owner only
      POST /admin/config       – XP per level & minting switch (admins)
• Loads secrets from a .env file in development
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from . import clock, config, validate
from .errors import PetError
from .events import Event
from .service import PetService

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)

# ──────────────────────────────────────────────────────────
# 1.  State – one service per process
# ──────────────────────────────────────────────────────────
pets = PetService(
    config.GameRules.from_env(),
    xp_per_level=config.XP_PER_LEVEL,
    minting_allowed=config.MINTING_ALLOWED,
)


def log_event(event: Event) -> None:
    logger.info("event %s", event)


pets.bus.subscribe(log_event)


# ──────────────────────────────────────────────────────────
# 2.  FastAPI app + CORS + rate limit
# ──────────────────────────────────────────────────────────

app = FastAPI(title="Tamapet API", version="1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[config.ALLOWED_ORIGIN],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


limiter = Limiter(
    key_func=get_remote_address,  # middleware runs before initData is parsed
    default_limits=[config.RATE_LIMIT],
    enabled=config.RATE_LIMIT_ENABLED,
    headers_enabled=True,
)

app.state.limiter = limiter


def ratelimit_handler(request, exc: RateLimitExceeded):
    resp = JSONResponse(
        status_code=429,
        content={"detail": "Too many taps – wait a sec 🐢"},
    )
    resp.headers["Access-Control-Allow-Origin"] = config.ALLOWED_ORIGIN
    resp.headers["Access-Control-Allow-Credentials"] = "true"
    return resp


app.add_exception_handler(RateLimitExceeded, ratelimit_handler)
app.add_middleware(SlowAPIMiddleware)


@app.exception_handler(RequestValidationError)
async def debug_validation(request: Request, exc: RequestValidationError):
    logger.debug("Validation error. Raw body: %r", await request.body())
    logger.debug("Details: %s", exc.errors())
    return JSONResponse(status_code=422, content={"detail": exc.errors()})


@app.exception_handler(PetError)
async def pet_error(request: Request, exc: PetError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


# ──────────────────────────────────────────────────────────
# 3.  Pydantic models  (request / response)
# ──────────────────────────────────────────────────────────
class InitPayload(BaseModel):
    initData: str = Field(..., description="Raw query string from WebApp")


class MintPayload(InitPayload):
    metadata_uri: str = ""


class AdminPayload(InitPayload):
    xp_per_level: Optional[int] = Field(None, gt=0)
    minting_allowed: Optional[bool] = None


class PetOut(BaseModel):
    id: int
    owner: str
    metadata_uri: str
    experience: int = Field(ge=0)
    hunger: int = Field(ge=0)
    happiness: int = Field(ge=0)
    level: int = Field(ge=0)
    last_interaction: int = Field(..., description="Unix timestamp decay is settled up to")


class FedOut(BaseModel):
    hunger: int
    delta: int = Field(..., description="Hunger actually gained after clamping")
    pet: PetOut


class TrainedOut(BaseModel):
    experience: int
    level: int
    pet: PetOut


class AdminOut(BaseModel):
    xp_per_level: int
    minting_allowed: bool


# ──────────────────────────────────────────────────────────
# 4.  Helpers
# ──────────────────────────────────────────────────────────
def identify(payload: InitPayload) -> str:
    return validate.caller_id(
        payload.initData, config.BOT_TOKEN, lifetime=config.INIT_DATA_LIFETIME
    )


def pet_out(pet_id: int, now: int) -> PetOut:
    view = pets.query(pet_id, now)
    return PetOut(
        id=pet_id,
        owner=pets.owners.owner_of(pet_id),
        metadata_uri=pets.owners.metadata_uri(pet_id),
        experience=view.experience,
        hunger=view.hunger,
        happiness=view.happiness,
        level=view.level,
        last_interaction=view.last_interaction,
    )


# ──────────────────────────────────────────────────────────
# 5.  API routes
# ──────────────────────────────────────────────────────────
@app.post("/pets", response_model=PetOut, status_code=status.HTTP_201_CREATED)
async def mint(payload: MintPayload):
    uid = identify(payload)
    now = clock.now()
    pet_id, _ = pets.mint(uid, now, payload.metadata_uri)
    return pet_out(pet_id, now)


@app.get("/pets/{pet_id}", response_model=PetOut)
async def state(pet_id: int):
    return pet_out(pet_id, clock.now())


@app.post("/pets/{pet_id}/feed", response_model=FedOut)
async def feed(pet_id: int, payload: InitPayload):
    uid = identify(payload)
    now = clock.now()
    event = pets.feed(pet_id, uid, now)
    return FedOut(hunger=event.hunger, delta=event.delta, pet=pet_out(pet_id, now))


@app.post("/pets/{pet_id}/train", response_model=TrainedOut)
async def train(pet_id: int, payload: InitPayload):
    uid = identify(payload)
    now = clock.now()
    event = pets.train(pet_id, uid, now)
    return TrainedOut(
        experience=event.experience, level=event.level, pet=pet_out(pet_id, now)
    )


@app.post("/admin/config", response_model=AdminOut)
async def admin_config(payload: AdminPayload):
    uid = identify(payload)
    if uid not in config.ADMIN_IDS:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="admins only"
        )

    if payload.xp_per_level is not None:
        pets.admin.xp_per_level = payload.xp_per_level  # gt=0 already enforced
    if payload.minting_allowed is not None:
        pets.admin.minting_allowed = payload.minting_allowed

    logger.info(
        "admin %s set xp_per_level=%s minting_allowed=%s",
        uid,
        pets.admin.xp_per_level,
        pets.admin.minting_allowed,
    )
    return AdminOut(
        xp_per_level=pets.admin.xp_per_level,
        minting_allowed=pets.admin.minting_allowed,
    )


# ──────────────────────────────────────────────────────────
# 6.  Local dev entry point
# ──────────────────────────────────────────────────────────
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "tamapet.main:app",
        host="127.0.0.1",
        port=8000,
        reload=True,  # auto-reload on code change
        log_level="info",
    )
